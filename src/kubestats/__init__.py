"""kubestats: kubelet stats scraper and metric-set normalizer."""

__version__ = "0.1.0"
