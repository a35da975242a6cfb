"""NFT sale, receiver and non-transferable contract logic over an in-memory chain model."""

__version__ = "0.20.0"
__all__ = ["chain", "fixed_price", "receiver_tester", "non_transferable"]