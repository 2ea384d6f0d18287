"""rk: release keeper.

Version arithmetic, bump idempotency and a durable release ledger for build
pipelines.
"""

__version__ = "0.3.0"
