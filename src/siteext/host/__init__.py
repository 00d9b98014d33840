"""Host platform interfaces and the in-memory reference host."""

from siteext.host.platform import HostPlatform, default_host
from siteext.host.protocols import ClassAttacher, Host, LifecycleSubscriber, Router, Translator

__all__ = [
    "ClassAttacher",
    "Host",
    "HostPlatform",
    "LifecycleSubscriber",
    "Router",
    "Translator",
    "default_host",
]
