class KubeStatsError(Exception):
    """Base exception for kubestats."""

    pass


class NodeAddressError(KubeStatsError):
    """Raised when no usable hostname/IP can be resolved for a node."""

    pass


class NodeNotReadyError(NodeAddressError):
    """Raised when a node reports a Ready condition that is not True."""

    pass


class ScrapeError(KubeStatsError):
    """Base exception for scrape failures scoped to a single node."""

    pass


class KubeletScrapeError(ScrapeError):
    """Raised when the kubelet stats endpoint cannot be queried or decoded."""

    pass
