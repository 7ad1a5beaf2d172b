"""Base classes for external integrations.

All integrations inherit from IntegrationBase, which provides:
    - Health check interface
    - Configuration check
    - A guard that raises before an unconfigured tool is used
"""

from abc import ABC, abstractmethod

from sheetwright.core.exceptions import IntegrationError
from sheetwright.core.logging import get_logger

logger = get_logger(__name__)


class IntegrationBase(ABC):
    """Abstract base class for all external integrations.

    Subclasses must implement:
        - health_check(): Check if the tool actually runs
        - is_configured(): Check if the tool can be found
    """

    #: Raised by ensure_configured(); subclasses narrow it
    error_class: type[IntegrationError] = IntegrationError

    @abstractmethod
    def health_check(self) -> bool:
        """Check if integration is healthy and available.

        Returns:
            True if the tool runs
        """
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if required configuration is present.

        Returns:
            True if the tool can be located
        """
        pass

    def ensure_configured(self) -> None:
        """Raise if the integration cannot be used.

        Raises:
            IntegrationError: (or the subclass's error_class) if not configured
        """
        if not self.is_configured():
            name = type(self).__name__
            logger.warning(f"{name} is not configured")
            raise self.error_class(f"{name} is not configured")
