"""taxregime — Old vs New regime income-tax engine with a FastAPI front."""

__version__ = "0.1.0"
