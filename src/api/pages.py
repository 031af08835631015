"""
ethscope - HTML pages
Every dynamic value goes through html.escape before it is placed in markup.
"""
from html import escape
from typing import Iterable, Optional
from urllib.parse import quote

from ..explorer.amounts import format_amount
from ..explorer.models import (
    AccountInfo, BlockDetail, BlockPage, BlockSummary, TokenTransfer, TransactionDetail, TransactionPage
)

def get_base_styles():
    """Shared CSS for all pages"""
    return """
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            max-width: 1400px;
            margin: 0 auto;
            padding: 20px;
            background: #f5f5f5;
            color: #333333;
        }
        a { color: #2563eb; text-decoration: none; }
        a:hover { text-decoration: underline; }
        .card {
            background: #ffffff;
            border: 1px solid #e0e0e0;
            border-radius: 10px;
            padding: 20px;
            margin-bottom: 20px;
        }
        .table { width: 100%; border-collapse: collapse; }
        .table td, .table th { padding: 8px; border-bottom: 1px solid #e0e0e0; text-align: left; }
        .mono { font-family: monospace; word-break: break-all; }
        .badge-success { color: #15803d; }
        .badge-failed { color: #b91c1c; }
        .muted { color: #666666; }
        .warning { background: #fef3c7; border-color: #f59e0b; }
    </style>
    """

def get_navigation_html():
    return """
    <div class="card">
        <a href="/">Home</a> |
        <a href="/homepage">Blocks</a>
        <form action="/txpage" method="get" style="display:inline; margin-left: 20px;">
            <input name="q" placeholder="Block number or hash" size="40">
            <button type="submit">Block</button>
        </form>
        <form action="/txinfo" method="get" style="display:inline; margin-left: 10px;">
            <input name="q" placeholder="Transaction hash" size="40">
            <button type="submit">Transaction</button>
        </form>
        <form action="/accInfo" method="get" style="display:inline; margin-left: 10px;">
            <input name="q" placeholder="Address" size="30">
            <button type="submit">Balance</button>
        </form>
    </div>
    """

def _layout(title: str, body: str) -> str:
    return f"""
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
        <title>{escape(title)} - ethscope</title>
        {get_base_styles()}
    </head>
    <body>
        {get_navigation_html()}
        {body}
    </body>
    </html>
    """

def _link(path: str, value, label: Optional[str] = None) -> str:
    return f'<a href="{path}?q={quote(str(value))}">{escape(str(label if label is not None else value))}</a>'

def _status(status: Optional[str]) -> str:
    if not status:
        return '<span class="muted">-</span>'
    css = "badge-success" if status == "SUCCESSFUL" else "badge-failed"
    return f'<span class="{css}">{escape(status)}</span>'

def token_amount_display(transfer: TokenTransfer) -> str:
    """Decimal amount, or the raw integer flagged when decimals() is unknown"""
    if transfer.decimals_known:
        return format_amount(transfer.normalized_amount)
    return f"{transfer.raw_amount} (raw, unknown decimals)"

def render_token_transfers(transfers: Iterable[TokenTransfer]) -> str:
    rows = "".join(
        f"""
        <tr>
            <td class="mono">{escape(t.contract)}</td>
            <td class="mono">{_link('/accInfo', t.from_address)}</td>
            <td class="mono">{_link('/accInfo', t.to_address)}</td>
            <td>{escape(token_amount_display(t))}</td>
            <td>{escape(str(t.raw_amount))}</td>
        </tr>
        """
        for t in transfers
    )
    if not rows:
        return '<p class="muted">No token transfers</p>'
    return f"""
    <table class="table">
        <thead><tr><th>Token</th><th>From</th><th>To</th><th>Amount</th><th>Raw amount</th></tr></thead>
        <tbody>{rows}</tbody>
    </table>
    """

def render_transaction_details(details: Iterable[TransactionDetail]) -> str:
    cards = []
    for tx in details:
        cards.append(f"""
        <table class="table">
            <tr><td><strong>Hash</strong></td><td class="mono">{_link('/txinfo', tx.hash)}</td></tr>
            <tr><td><strong>Status</strong></td><td>{_status(tx.status)}</td></tr>
            <tr><td><strong>From</strong></td><td class="mono">{_link('/accInfo', tx.from_address)}</td></tr>
            <tr><td><strong>To</strong></td><td class="mono">{escape(tx.to_address)}</td></tr>
            <tr><td><strong>Value</strong></td><td>{escape(format_amount(tx.value_ether))} ETH ({tx.value_wei} wei)</td></tr>
            <tr><td><strong>Gas</strong></td><td>{tx.gas}</td></tr>
            <tr><td><strong>Gas price</strong></td><td>{tx.gas_price}</td></tr>
            <tr><td><strong>Gas used</strong></td><td>{tx.gas_used if tx.gas_used is not None else '-'}</td></tr>
            <tr><td><strong>Nonce</strong></td><td>{tx.nonce}</td></tr>
            <tr><td><strong>Input data</strong></td><td class="mono">{escape(tx.data) or '-'}</td></tr>
        </table>
        """)
    if not cards:
        return '<p class="muted">No transactions</p>'
    return "<hr>".join(cards)

def _block_row(block: BlockSummary) -> str:
    if block.skipped:
        return f"""
        <tr class="warning">
            <td>{block.number}</td>
            <td colspan="6" class="muted">Unavailable: {escape(block.skipped_reason)}</td>
        </tr>
        """
    mined_on = block.mined_on.strftime('%Y-%m-%d %H:%M:%S UTC') if block.mined_on else '-'
    last_tx = _link('/txinfo', block.last_transaction_hash) if block.last_transaction_hash else '-'
    return f"""
    <tr>
        <td>{_link('/txpage', block.number)}</td>
        <td class="mono">{_link('/blockdetails', block.hash) if block.hash else '-'}</td>
        <td>{block.transactions}</td>
        <td class="mono">{last_tx}</td>
        <td>{_status(block.last_transaction_status)}</td>
        <td>{block.gas_used}</td>
        <td>{mined_on}</td>
    </tr>
    """

def render_home(page: BlockPage, node_url: str) -> str:
    stats = ""
    if page.stats is not None:
        stats = f"""
        <table class="table">
            <tr><td><strong>Node</strong></td><td class="mono">{escape(node_url)}</td></tr>
            <tr><td><strong>Latest block</strong></td><td>{page.head_number}</td></tr>
            <tr><td><strong>Network ID</strong></td><td>{page.stats.network_id}</td></tr>
            <tr><td><strong>Pending transactions</strong></td><td>{page.stats.pending_transactions}</td></tr>
            <tr><td><strong>Suggested gas price</strong></td><td>{page.stats.suggested_gas_price} wei</td></tr>
        </table>
        """
    partial = ""
    if page.partial:
        partial = '<div class="card warning">Some blocks could not be loaded from the node.</div>'

    blocks = "".join(_block_row(block) for block in page.blocks)
    transfers = [t for block in page.blocks for t in block.token_transfers]
    accounts = "".join(
        f"""
        <tr>
            <td>{account.index if account.index is not None else ''}</td>
            <td class="mono">{_link('/accInfo', account.address)}</td>
            <td>{escape(format_amount(account.balance_ether))} ETH</td>
            <td>{account.transaction_count}</td>
        </tr>
        """
        for account in page.accounts
    )
    accounts_card = ""
    if accounts:
        accounts_card = f"""
        <div class="card">
            <h2>Accounts</h2>
            <table class="table">
                <thead><tr><th>#</th><th>Address</th><th>Balance</th><th>Transactions</th></tr></thead>
                <tbody>{accounts}</tbody>
            </table>
        </div>
        """

    body = f"""
    <div class="card"><h1>Blocks</h1>{stats}</div>
    {partial}
    <div class="card">
        <table class="table">
            <thead><tr><th>Block</th><th>Hash</th><th>Txns</th><th>Last transaction</th><th>Status</th><th>Gas used</th><th>Mined on</th></tr></thead>
            <tbody>{blocks}</tbody>
        </table>
        <p>
            <a href="/homepage/{page.prev_page}">&laquo; Newer</a> |
            <a href="/homepage/{page.next_page}">Older &raquo;</a>
        </p>
    </div>
    <div class="card"><h2>Token transfers</h2>{render_token_transfers(transfers)}</div>
    {accounts_card}
    """
    return _layout(f"Blocks page {page.page}", body)

def render_transactions(page: TransactionPage) -> str:
    status = f"<p><strong>Status:</strong> {_status(page.status)}</p>" if page.status else ""
    body = f"""
    <div class="card">
        <h1>Block {_link('/txpage', page.block_number)}</h1>
        <p class="mono">{_link('/blockdetails', page.block_hash)}</p>
        {status}
    </div>
    <div class="card"><h2>Transactions</h2>{render_transaction_details(page.transactions)}</div>
    <div class="card"><h2>Token transfers</h2>{render_token_transfers(page.token_transfers)}</div>
    """
    return _layout(f"Block {page.block_number}", body)

def render_block_detail(block: BlockDetail) -> str:
    body = f"""
    <div class="card">
        <h1>Block #{block.number}</h1>
        <table class="table">
            <tr><td><strong>Hash</strong></td><td class="mono">{escape(block.hash)}</td></tr>
            <tr><td><strong>Parent hash</strong></td><td class="mono">{_link('/blockdetails', block.parent_hash)}</td></tr>
            <tr><td><strong>Uncle hash</strong></td><td class="mono">{escape(block.uncle_hash)}</td></tr>
            <tr><td><strong>Nonce</strong></td><td>{block.nonce}</td></tr>
            <tr><td><strong>Transactions</strong></td><td>{_link('/txpage', block.number, str(block.transactions))}</td></tr>
            <tr><td><strong>Gas used</strong></td><td>{block.gas_used}</td></tr>
            <tr><td><strong>Gas limit</strong></td><td>{block.gas_limit}</td></tr>
            <tr><td><strong>Difficulty</strong></td><td>{block.difficulty}</td></tr>
            <tr><td><strong>Size</strong></td><td>{block.size} bytes</td></tr>
            <tr><td><strong>Mined on</strong></td><td>{block.mined_on.strftime('%Y-%m-%d %H:%M:%S UTC')}</td></tr>
        </table>
    </div>
    """
    return _layout(f"Block {block.number}", body)

def render_account(account: AccountInfo) -> str:
    body = f"""
    <div class="card">
        <h1>Account</h1>
        <table class="table">
            <tr><td><strong>Address</strong></td><td class="mono">{escape(account.address)}</td></tr>
            <tr><td><strong>Balance</strong></td><td>{escape(format_amount(account.balance_ether))} ETH</td></tr>
            <tr><td><strong>Transactions</strong></td><td>{account.transaction_count}</td></tr>
        </table>
    </div>
    """
    return _layout("Account", body)

def render_welcome(node_url: str) -> str:
    body = f"""
    <div class="card">
        <h1>ethscope</h1>
        <p>Browse blocks, transactions and token transfers of an Ethereum node.</p>
        <form action="/homepage" method="get">
            <input name="host" value="{escape(node_url, quote=True)}" size="40">
            <button type="submit">Connect</button>
        </form>
    </div>
    """
    return _layout("Welcome", body)

def render_error(status: int, message: str, error: Optional[str] = None) -> str:
    detail = f'<p class="mono muted">{escape(error)}</p>' if error else ""
    body = f"""
    <div class="card warning">
        <h1>{status}</h1>
        <p>{escape(message)}</p>
        {detail}
        <p><a href="/">Back to the start page</a></p>
    </div>
    """
    return _layout(f"Error {status}", body)
