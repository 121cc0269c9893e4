"""
Service registry for cloud document services.

Holds at most one handler per service type and dispatches detection to the
first handler, by priority, that recognises a URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import structlog

from ..config.config import ResolverConfig
from .box import BoxService
from .dropbox import DropboxService
from .exceptions import UnsupportedServiceError
from .google import GoogleService
from .models import ServiceFileInfo, ServiceInfo, ServiceType
from .onedrive import OneDriveService
from .protocols import PageContext, ServiceHandler

logger = structlog.get_logger(__name__)


@dataclass(slots=True, frozen=True)
class Detection:
    """A matched handler and the file info it extracted."""

    handler: ServiceHandler
    info: ServiceFileInfo


class ServiceRegistry:
    """
    Ordered set of service handlers.

    Handlers are tried in ascending ``priority``; equal priorities keep
    registration order. Registering a second handler for a type replaces the
    first and keeps its registration slot.
    """

    def __init__(self) -> None:
        self._handlers: Dict[ServiceType, ServiceHandler] = {}
        self._order: Dict[ServiceType, int] = {}
        self.logger = logger.bind(component="ServiceRegistry")

    def register(self, handler: ServiceHandler) -> None:
        if handler.type in self._handlers:
            self.logger.debug("Replacing service handler", service=handler.type.value)
        else:
            self._order[handler.type] = len(self._order)
        self._handlers[handler.type] = handler

    def get_handler(self, service_type: ServiceType) -> Optional[ServiceHandler]:
        return self._handlers.get(service_type)

    def handlers(self) -> List[ServiceHandler]:
        return sorted(self._handlers.values(), key=lambda h: (h.priority, self._order[h.type]))

    def detect(self, url: str) -> Optional[Detection]:
        """Return the first handler that recognises ``url`` with its file info."""
        for handler in self.handlers():
            info = handler.detect(url)
            if info is not None:
                self.logger.debug("Service detected", service=handler.type.value, file_id=info.file_id)
                return Detection(handler=handler, info=info)
        return None

    async def resolve(self, url: str, page: Optional[PageContext] = None) -> str:
        """Detect the service for ``url`` and resolve its download URL.

        Raises:
            UnsupportedServiceError: If no handler recognises the URL
            ResolutionError: Subclasses from the handler's strategy chain
        """
        detection = self.detect(url)
        if detection is None:
            raise UnsupportedServiceError(f"No registered service matches URL: {url}")

        download_url = await detection.handler.get_download_url(detection.info, page)
        self.logger.info(
            "Download URL resolved",
            service=detection.handler.type.value,
            file_id=detection.info.file_id,
            file_type=detection.info.file_type.value,
        )
        return download_url

    def supported_services(self) -> List[ServiceInfo]:
        return [ServiceInfo(type=h.type, name=h.name, display_name=h.name) for h in self.handlers()]

    def clear(self) -> None:
        self._handlers.clear()
        self._order.clear()

    def __len__(self) -> int:
        return len(self._handlers)


def create_default_registry(config: Optional[ResolverConfig] = None) -> ServiceRegistry:
    """Registry with the built-in services: Google, Dropbox, OneDrive, Box."""
    config = config or ResolverConfig()
    registry = ServiceRegistry()
    registry.register(GoogleService())
    registry.register(DropboxService())
    registry.register(OneDriveService(scrape_timeout=config.scrape_timeout_seconds))
    registry.register(BoxService(scrape_timeout=config.scrape_timeout_seconds))
    return registry
