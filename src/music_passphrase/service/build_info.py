from dataclasses import asdict, dataclass
from datetime import datetime

from music_passphrase.config import Settings

UNKNOWN = "unknown"


@dataclass(frozen=True)
class BuildInfo:
    commit_hash: str
    build_time: str
    build_version: str
    environment: str

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def as_dict(self) -> dict:
        return asdict(self)


def get_build_info(settings: Settings) -> BuildInfo:
    return BuildInfo(
        commit_hash=settings.build_commit_hash or UNKNOWN,
        build_time=settings.build_time or UNKNOWN,
        build_version=settings.build_version or UNKNOWN,
        environment=settings.app_env or "development",
    )


def format_build_time(build_time: str) -> str:
    if build_time == UNKNOWN:
        return "Unknown"
    try:
        parsed = datetime.fromisoformat(build_time.replace("Z", "+00:00"))
    except ValueError:
        return build_time
    return parsed.strftime("%b %d, %Y, %I:%M %p")


def short_version(info: BuildInfo) -> str:
    return "dev" if info.commit_hash == UNKNOWN else info.commit_hash
