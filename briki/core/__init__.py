"""
Core services: database access and external registries.
"""

from .mongodb_client import get_mongodb_client, get_database, get_collection, Collections
from .runt_client import RuntClient, VehicleData, get_runt_client

__all__ = [
    "get_mongodb_client",
    "get_database",
    "get_collection",
    "Collections",
    "RuntClient",
    "VehicleData",
    "get_runt_client",
]
