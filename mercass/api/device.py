"""Device classification and the login fingerprint sent to the auth service."""

import hashlib
import uuid
from dataclasses import dataclass

from user_agents import parse as parse_user_agent

from mercass.database.entities.session import LoginPayload


@dataclass(frozen=True)
class DeviceInfo:
    browser: str
    os: str
    device_type: str
    is_mobile: int


def classify(user_agent: str) -> DeviceInfo:
    ua = parse_user_agent(user_agent or "")
    if ua.is_bot:
        device_type = "bot"
    elif ua.is_tablet:
        device_type = "tablet"
    elif ua.is_mobile:
        device_type = "smartphone"
    elif ua.is_pc:
        device_type = "desktop"
    else:
        device_type = "unknown"
    return DeviceInfo(
        browser=ua.browser.family or "",
        os=ua.os.family or "",
        device_type=device_type,
        # anything that is not a desktop counts as mobile
        is_mobile=0 if device_type == "desktop" else 1,
    )


def fingerprint(user_agent: str, device: DeviceInfo, ip: str) -> str:
    """sha256 over the user agent, device fields and client IP (`ValidHash`)."""
    total = f"{user_agent or ''}{device.is_mobile}{device.browser}{device.os}{ip or ''}{device.device_type}"
    return hashlib.sha256(total.encode("utf-8")).hexdigest()


def build_login_payload(identifier: str, password: str, user_agent: str, ip: str) -> LoginPayload:
    device = classify(user_agent)
    return LoginPayload(
        UserName=identifier or "",
        pwd=password or "",
        UA=user_agent or "",
        IsMobile=device.is_mobile,
        BrowserName=device.browser,
        Os=device.os,
        Auth=str(uuid.uuid4()),
        ValidHash=fingerprint(user_agent, device, ip),
        connectionIp=ip or "",
        Devices=device.device_type,
    )
