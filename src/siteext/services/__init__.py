"""Service layer: operations returning ServiceResult.

Services may import from domain, lifecycle, navigation, extensions and host.
They must never import from commands or output.
"""
