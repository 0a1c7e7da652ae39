"""bbserve configuration.

BBConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path

from bbserve._errors import ConfigError

DEFAULT_PORT = 3000


@dataclass(frozen=True, slots=True)
class BBConfig:
    """Configuration for a bbserve application.

    Attributes:
        root: Project root directory (contains views/ and public/).
              Always resolved to an absolute path on construction.
        host: Bind address.
        port: Bind port.
        workers: Number of Pounce workers for ``serve`` (0 = auto-detect).
        templates_dir: Directory containing Kida templates.
        static_dir: Directory containing static assets, served at ``/``.
        templated: Render ``index.html`` on ``/`` instead of the plain greeting.
        cors_origins: Origins allowed by the CORS middleware.  An empty tuple
            disables CORS handling entirely.
        security_headers: Add X-Frame-Options, nosniff, Referrer-Policy and
            a Content-Security-Policy to HTML responses.
        request_log: Print one line per request to stderr.
        probes: Mount Chirp's ``/health`` and ``/ready`` probes.  Off by
            default so every path other than ``/`` and ``/supersecret`` 404s.

    """

    root: Path = field(default_factory=Path.cwd)
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    workers: int = 0
    templates_dir: str = "views"
    static_dir: str = "public"
    templated: bool = True
    cors_origins: tuple[str, ...] = ("*",)
    security_headers: bool = True
    request_log: bool = True
    probes: bool = False

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if isinstance(self.cors_origins, (list, str)):
            origins = (self.cors_origins,) if isinstance(self.cors_origins, str) else self.cors_origins
            object.__setattr__(self, "cors_origins", tuple(origins))
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigError(msg)
        if self.workers < 0:
            msg = f"workers must be >= 0, got {self.workers}"
            raise ConfigError(msg)

    @property
    def templates_path(self) -> Path:
        """Absolute path to templates directory."""
        return self.root / self.templates_dir

    @property
    def static_path(self) -> Path:
        """Absolute path to static assets directory."""
        return self.root / self.static_dir
