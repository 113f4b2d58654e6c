import hashlib

from mercass.api.device import build_login_payload, classify, fingerprint

DESKTOP = ("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
           "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36")
IPHONE = ("Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) AppleWebKit/605.1.15 "
          "(KHTML, like Gecko) Version/16.0 Mobile/15E148 Safari/604.1")


def test_desktop_browser():
    device = classify(DESKTOP)

    assert device.device_type == "desktop"
    assert device.is_mobile == 0
    assert device.browser == "Chrome"
    assert device.os == "Windows"


def test_phone_counts_as_mobile():
    device = classify(IPHONE)

    assert device.device_type == "smartphone"
    assert device.is_mobile == 1
    assert device.os == "iOS"


def test_fingerprint_is_sha256_of_the_device_fields():
    device = classify(DESKTOP)
    expected = hashlib.sha256(
        f"{DESKTOP}0{device.browser}{device.os}10.0.0.1desktop".encode("utf-8")
    ).hexdigest()

    assert fingerprint(DESKTOP, device, "10.0.0.1") == expected


def test_each_login_gets_a_fresh_session_id():
    first = build_login_payload("ada", "pw", DESKTOP, "10.0.0.1")
    second = build_login_payload("ada", "pw", DESKTOP, "10.0.0.1")

    assert first.Auth != second.Auth
    assert first.ValidHash == second.ValidHash
    assert first.Devices == "desktop"
    assert first.connectionIp == "10.0.0.1"
