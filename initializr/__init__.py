"""go-ctl initializr: scaffolds Go services and frontend apps as ZIP archives."""

__version__ = "0.1.0"
