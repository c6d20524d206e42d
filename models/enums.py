from enum import Enum

class ResourceKind(str, Enum):
    """What a request path asks the server for"""
    VIEWER = "viewer"
    COMPRESSED = "compressed"
    STATIC = "static"

class PayloadOrigin(str, Enum):
    """Where a served .m8 payload came from"""
    CACHED = "cached"
    COMPRESSED_ON_DEMAND = "compressed_on_demand"
