# src/exceptions.py

class ExplorerError(Exception):
    """Base exception class for explorer-related errors"""
    pass

class ConfigError(ExplorerError):
    """Raised when the configuration file cannot be read"""
    pass

class ProviderError(ExplorerError):
    """Base exception class for chain data provider errors"""
    pass

class NotFoundError(ProviderError):
    """Raised when a block, transaction or receipt does not exist on the node"""
    pass

class ProviderUnavailableError(ProviderError):
    """Raised when the node cannot be reached or rejects a request"""
    pass

class LogDecodeError(ExplorerError):
    """Raised when an event log entry is malformed"""
    pass

class DecimalsResolutionError(ExplorerError):
    """Raised when a token's decimals() value cannot be read"""
    pass

class AggregationTimeoutError(ExplorerError):
    """Raised when a page takes longer than the configured page timeout"""
    pass
