"""Default sharing preferences applied to newly created households."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .env import env_flag


@dataclass(frozen=True, slots=True)
class PrivacyConfig:
    share_address: bool = True
    share_home_phone: bool = True
    share_mobile_phone: bool = False
    share_work_phone: bool = False
    share_fax: bool = False
    share_email: bool = False
    share_birthday: bool = True
    share_anniversary: bool = True

    def share_defaults(self) -> dict[str, bool]:
        return asdict(self)


def get_privacy_config() -> PrivacyConfig:
    baseline = PrivacyConfig()
    values = {
        name: env_flag(f"FAMSYNC_{name.upper()}_BY_DEFAULT", default=default)
        for name, default in baseline.share_defaults().items()
    }
    return PrivacyConfig(**values)
