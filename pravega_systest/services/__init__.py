from pravega_systest.services.interface import Service

__all__ = ["Service"]
