"""Unit tests for the cipher method registry."""

import pytest
from cryptography.hazmat.decrepit.ciphers import modes as decrepit_modes
from cryptography.hazmat.primitives.ciphers import modes

from simplecrypt.core.exceptions import ConfigurationError, UnsupportedMethodError
from simplecrypt.security.methods import DEFAULT_METHOD, available_methods, get_method


def test_default_method_is_aes192_cbc():
    method = get_method(DEFAULT_METHOD)
    assert method.name == "aes-192-cbc"
    assert method.key_size == 24
    assert method.iv_size == 16
    assert method.padded


def test_lookup_is_case_insensitive():
    assert get_method("AES-256-CBC") is get_method("aes256")


@pytest.mark.parametrize(
    "name, mode_cls, padded",
    [
        ("aes-128-cbc", modes.CBC, True),
        ("aes-128-ecb", modes.ECB, True),
        ("aes-128-cfb", decrepit_modes.CFB, False),
        ("aes-128-ofb", decrepit_modes.OFB, False),
        ("aes-128-ctr", modes.CTR, False),
    ],
)
def test_build_mode(name, mode_cls, padded):
    method = get_method(name)
    assert isinstance(method.build_mode(b"\x00" * 16), mode_cls)
    assert method.padded is padded


def test_ecb_has_no_iv():
    assert get_method("aes-256-ecb").iv_size == 0


def test_gcm_is_authenticated():
    method = get_method("aes-256-gcm")
    assert method.authenticated
    assert method.iv_size == 12
    with pytest.raises(TypeError):
        method.build_mode(b"\x00" * 12)


def test_unknown_method():
    with pytest.raises(UnsupportedMethodError) as excinfo:
        get_method("des-ede3")
    # callers catching configuration problems see it too
    assert isinstance(excinfo.value, ConfigurationError)
    assert "des-ede3" in str(excinfo.value)
    assert "aes192" in str(excinfo.value)


def test_non_string_method():
    with pytest.raises(UnsupportedMethodError):
        get_method(None)


def test_available_methods_sorted():
    names = available_methods()
    assert names == sorted(names)
    assert {"aes128", "aes192", "aes256", "aes-256-gcm"} <= set(names)
