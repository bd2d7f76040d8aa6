"""Medical OCR + medication explainer: relay service and client workflow."""

__version__ = "0.1.0"
