from .kubelet_client import KubeletClient
from .kubelet_collector import KubeletCollector
from .node_collector import NodeCollector

__all__ = [
    "KubeletClient",
    "KubeletCollector",
    "NodeCollector",
]
