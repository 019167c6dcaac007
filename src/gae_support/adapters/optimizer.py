"""Optimizer serving framework artifacts generated at deploy time."""

import logging
import tempfile
from pathlib import Path

from gae_support.interfaces.hosting import HostingContext
from gae_support.interfaces.optimizer import Optimizer

logger = logging.getLogger(__name__)

CACHE_DIR = Path("bootstrap") / "cache"
CONFIG_ARTIFACT = "config.json"
ROUTES_ARTIFACT = "routes.json"
SERVICES_ARTIFACT = "services.json"
TEMPORARY_DIR = Path("gae-support") / "storage"


class ArtifactOptimizer(Optimizer):
    """Serve pre-generated artifacts from ``<base>/bootstrap/cache``.

    Artifacts are only served when the process is hosted and serving
    requests. Console runs are the ones that (re)generate artifacts, so they
    always see the framework defaults.
    """

    def __init__(
        self,
        base_path: Path,
        interactive: bool,
        context: HostingContext | None = None,
    ) -> None:
        super().__init__(base_path, interactive)
        self._context = context or HostingContext.not_hosted()
        self._artifacts: dict[str, Path] = {}
        self._bootstrapped = False

    @property
    def active(self) -> bool:
        return self._context.is_hosted and not self.interactive

    def bootstrap(self) -> None:
        if self._bootstrapped:
            logger.debug("Optimizer already bootstrapped; skipping.")
            return
        self._bootstrapped = True

        if not self.active:
            logger.debug(
                "Optimizer inactive (hosted=%s, interactive=%s).",
                self._context.is_hosted,
                self.interactive,
            )
            return

        cache_dir = self.base_path / CACHE_DIR
        for name in (CONFIG_ARTIFACT, ROUTES_ARTIFACT, SERVICES_ARTIFACT):
            if (candidate := cache_dir / name).is_file():
                self._artifacts[name] = candidate
        logger.debug(
            "Optimizer found artifacts in %s: %s",
            cache_dir,
            sorted(self._artifacts) or "<none>",
        )

    def cached_config_path(self) -> Path | None:
        return self._artifacts.get(CONFIG_ARTIFACT)

    def cached_routes_path(self) -> Path | None:
        return self._artifacts.get(ROUTES_ARTIFACT)

    def cached_services_path(self) -> Path | None:
        return self._artifacts.get(SERVICES_ARTIFACT)

    @staticmethod
    def temporary_path() -> Path:
        return Path(tempfile.gettempdir()) / TEMPORARY_DIR
