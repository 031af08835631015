# src/cli/cli.py
import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from ..api.server import create_app
from ..chain.provider import Web3Provider
from ..config.explorer_config import DEFAULT_CONFIG_PATH, ExplorerConfig
from ..explorer.aggregator import BlockRangeAggregator
from ..explorer.amounts import format_amount
from ..monitoring.logging_config import LogConfig
from ..monitoring.metrics import metrics
from ..utils.logger import get_logger, parse_level

logger = logging.getLogger(__name__)

class CLI:
    def __init__(self):
        self.config: Optional[ExplorerConfig] = None

    def main(self, args: List[str]):
        parser = self.create_parser()
        args = parser.parse_args(args)

        if not hasattr(args, 'func'):
            parser.print_help()
            return

        self.config = self.load_config(args)
        args.func(args)

    def create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='ethscope block explorer')
        parser.add_argument('--config', default=DEFAULT_CONFIG_PATH, help='Path to the YAML configuration')
        parser.add_argument('--node-url', help='JSON-RPC endpoint of the node')
        subparsers = parser.add_subparsers(title='commands', dest='command')

        serve = subparsers.add_parser('serve', help='Start the explorer web server')
        serve.add_argument('--host', help='Interface to bind')
        serve.add_argument('--port', type=int, help='Port to listen on')
        serve.set_defaults(func=self.serve)

        blocks = subparsers.add_parser('blocks', help='Print one page of blocks and token transfers')
        blocks.add_argument('page', type=int, nargs='?', default=0, help='Page index, 0 is the chain head')
        blocks.set_defaults(func=self.show_blocks)

        return parser

    def load_config(self, args) -> ExplorerConfig:
        config = ExplorerConfig(args.config)
        config.override('node.url', args.node_url)
        config.override('server.host', getattr(args, 'host', None))
        config.override('server.port', getattr(args, 'port', None))
        return config

    def setup_monitoring(self):
        LogConfig.from_config(self.config).setup_logging()
        metrics.start(int(self.config.get('monitoring.metrics_port') or 0))

    def serve(self, args):
        self.setup_monitoring()
        host = self.config.get('server.host')
        port = int(self.config.get('server.port'))
        logger.info(f"Starting explorer on {host}:{port} for node {self.config.get('node.url')}")
        uvicorn.run(create_app(self.config), host=host, port=port)

    def show_blocks(self, args):
        get_logger('src', parse_level(self.config.get('monitoring.log_level')))
        provider = Web3Provider.from_url(
            self.config.get('node.url'), float(self.config.get('node.request_timeout'))
        )
        aggregator = BlockRangeAggregator(
            provider,
            blocks_per_page=int(self.config.get('explorer.blocks_per_page')),
            receipt_workers=int(self.config.get('explorer.receipt_workers', 1)),
            page_timeout=self.config.get('explorer.page_timeout'),
        )
        page = aggregator.build_page(max(args.page, 0))

        print(f"Head block: {page.head_number}  (page {page.page}, next {page.next_page}, prev {page.prev_page})")
        for block in page.blocks:
            if block.skipped:
                print(f"  #{block.number}  skipped: {block.skipped_reason}")
                continue
            print(f"  #{block.number}  {block.hash}  txs={block.transactions}  gas={block.gas_used}")
            for transfer in block.token_transfers:
                amount = format_amount(transfer.normalized_amount) if transfer.decimals_known \
                    else f"{transfer.raw_amount} (raw)"
                print(f"      {transfer.contract}: {transfer.from_address} -> {transfer.to_address}  {amount}")

def main():
    cli = CLI()
    cli.main(sys.argv[1:])

if __name__ == "__main__":
    main()
