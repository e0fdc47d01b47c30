"""Platform-agnostic service manager facade.

ServiceManager is the single entry point for hosting programs. It detects the
native service manager once, at construction, and forwards every lifecycle
call to that backend for the rest of the process lifetime.

Example:
    >>> from svcdaemon import new_daemon
    >>> manager = new_daemon("myapp", "8080", "1.0", "My App", ["network.target"])
    >>> message, error = manager.install(["--serve"])
    >>> if error is not None:
    ...     print(message, error)
"""

from collections.abc import Callable, Sequence

from svcdaemon.config import Settings, get_settings
from svcdaemon.daemon.backends import BACKENDS, ServiceBackend
from svcdaemon.daemon.detect import detect_backend_kind
from svcdaemon.daemon.logging_setup import get_logger
from svcdaemon.models import ActionResult, BackendKind, PathResult, ServiceDescriptor, StatusResult

logger = get_logger(__name__)


class ServiceManager:
    """Facade: detects the service manager and delegates to its backend."""

    def __init__(
        self,
        descriptor: ServiceDescriptor,
        settings: Settings | None = None,
        *,
        backend: ServiceBackend | None = None,
        exec_resolver: Callable[[], str] | None = None,
    ):
        self.descriptor = descriptor
        self.settings = settings or get_settings()
        if backend is None:
            backend = get_backend(descriptor, self.settings, exec_resolver=exec_resolver)
        self._backend = backend

    @property
    def backend_kind(self) -> BackendKind:
        return self._backend.kind

    @property
    def backend(self) -> ServiceBackend:
        return self._backend

    def install(self, args: Sequence[str] = ()) -> ActionResult:
        """Install the service; ``args`` are appended to its command line."""
        return self._backend.install(args)

    def remove(self) -> ActionResult:
        return self._backend.remove()

    def start(self) -> ActionResult:
        return self._backend.start()

    def stop(self) -> ActionResult:
        return self._backend.stop()

    def restart(self) -> ActionResult:
        return self._backend.restart()

    def status(self) -> StatusResult:
        return self._backend.status()

    def exec_path(self, service_name: str = "") -> PathResult:
        return self._backend.exec_path(service_name)


def get_backend(
    descriptor: ServiceDescriptor,
    settings: Settings | None = None,
    kind: BackendKind | None = None,
    *,
    exec_resolver: Callable[[], str] | None = None,
) -> ServiceBackend:
    """Factory function to build the backend for this host.

    Args:
        descriptor: Service to manage
        settings: Settings; defaults to get_settings()
        kind: Force a backend instead of detecting one
        exec_resolver: Returns the program path to install; defaults to the
            running process executable

    Returns:
        ServiceBackend instance

    Raises:
        UnsupportedPlatformError: If no backend fits this platform
    """
    if settings is None:
        settings = get_settings()
    if kind is None:
        kind = detect_backend_kind(settings)
    logger.debug("Using {} backend for {}", kind, descriptor.name)
    return BACKENDS[kind](descriptor, settings, exec_resolver=exec_resolver)


def new_daemon(
    name: str,
    port: str = "",
    version: str = "",
    description: str = "",
    dependencies: Sequence[str] = (),
    settings: Settings | None = None,
) -> ServiceManager:
    """Build a ServiceManager from plain descriptor fields."""
    descriptor = ServiceDescriptor(
        name=name,
        port=port,
        version=version,
        description=description,
        dependencies=tuple(dependencies),
    )
    return ServiceManager(descriptor, settings)
