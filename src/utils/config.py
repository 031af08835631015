# src/utils/config.py

class Config:
    # Node defaults
    DEFAULT_NODE_URL = "http://0.0.0.0:8545"  # Ganache
    DEFAULT_REQUEST_TIMEOUT = 15  # seconds

    # Server defaults
    DEFAULT_SERVER_HOST = "0.0.0.0"
    DEFAULT_SERVER_PORT = 5051

    # Pagination
    BLOCKS_PER_PAGE = 10
    DEFAULT_PAGE_TIMEOUT = 60  # seconds for a full home page

    # Denominations
    ETHER_DECIMALS = 18  # 1 ether = 10**18 wei

    # Exact decimal arithmetic; a uint256 has at most 78 digits
    DECIMAL_PRECISION = 100

    # ERC-20 protocol constants
    TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"
    DECIMALS_FUNCTION_SIGNATURE = "decimals()"
    MAX_UINT8 = 255

    # ABI layout
    WORD_SIZE = 32  # bytes per topic / ABI word
    ADDRESS_SIZE = 20
    SELECTOR_SIZE = 4
    MIN_TRANSFER_TOPICS = 3  # signature + indexed from + indexed to

    # Display
    CONTRACT_CREATION_MARKER = "[CONTRACT CREATION]"
    STATUS_SUCCESSFUL = "SUCCESSFUL"
    STATUS_FAILED = "FAILED"
