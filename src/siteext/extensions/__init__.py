"""Site extensions: capabilities and the bootstrap that binds them to the host."""

from siteext.extensions.bootstrap import ExtensionBootstrap, SiteExtensions, bootstrap

__all__ = ["ExtensionBootstrap", "SiteExtensions", "bootstrap"]
