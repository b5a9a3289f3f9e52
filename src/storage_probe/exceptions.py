# storage_probe/exceptions.py
"""Error types raised by the storage probe pipeline."""


class StorageProbeError(Exception):
    pass


class ConfigurationError(StorageProbeError):
    pass


class TransactionNotFoundError(StorageProbeError):
    def __init__(self, tx_hash: str):
        self.tx_hash = tx_hash
        super().__init__(f"Transaction not found: {tx_hash}")


class RpcError(StorageProbeError):
    pass


class RpcTransportError(RpcError):
    pass


class RpcResponseError(RpcError):
    pass
