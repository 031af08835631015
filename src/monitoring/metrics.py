# File: src/monitoring/metrics.py

import logging
from prometheus_client import Counter, Histogram, start_http_server

logger = logging.getLogger(__name__)

class MetricsCollector:
    def __init__(self):
        # Node metrics
        self.rpc_calls = Counter(
            'ethscope_rpc_calls', 'JSON-RPC calls issued to the node', ['method']
        )
        self.rpc_errors = Counter(
            'ethscope_rpc_errors', 'JSON-RPC calls that failed', ['method']
        )

        # Explorer metrics
        self.decimals_lookups = Counter(
            'ethscope_decimals_lookups', 'Token decimals lookups', ['outcome']
        )
        self.skipped_blocks = Counter(
            'ethscope_skipped_blocks', 'Blocks left out of a page after a node error'
        )
        self.page_build_time = Histogram(
            'ethscope_page_build_seconds', 'Time spent assembling one block page'
        )
        self._server_port = None

    def record_rpc_call(self, method: str):
        self.rpc_calls.labels(method=method).inc()

    def record_rpc_error(self, method: str):
        self.rpc_errors.labels(method=method).inc()

    def record_decimals_lookup(self, outcome: str):
        self.decimals_lookups.labels(outcome=outcome).inc()

    def record_skipped_block(self):
        self.skipped_blocks.inc()

    def start(self, port: int) -> bool:
        """Expose metrics over HTTP; a port of 0 leaves the server off"""
        if not port or self._server_port is not None:
            return False
        start_http_server(port)
        self._server_port = port
        logger.info(f"Metrics server listening on port {port}")
        return True

metrics = MetricsCollector()
