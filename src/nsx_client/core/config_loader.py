"""
NSX Client - Configuration Loader

This module resolves the NSX manager connection settings. Each setting is
taken from the first source that provides it:

1. Explicit arguments
2. Environment variables (NSX_MANAGER_URL, NSX_USERNAME, NSX_PASSWORD, NSX_VERIFY_SSL)
3. Profile in the config file (~/.nsx-client/config.json)
4. System keyring (password only)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import keyring
from keyring.errors import KeyringError
from pydantic import ValidationError as PydanticValidationError

from ..shared.constants import (
    ENV_MANAGER_URL,
    ENV_PASSWORD,
    ENV_USERNAME,
    ENV_VERIFY_SSL,
    LOGGER_NAME,
)
from .exceptions import ConfigurationError
from .models import NSXConfig, normalize_url

logger = logging.getLogger(LOGGER_NAME)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


class ConfigLoader:
    """
    Configuration loader for NSX manager credentials.

    Security features:
    - Automatic file permission enforcement (0600)
    - No credential logging
    - Profile-based multi-manager support
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".nsx-client"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"
    REQUIRED_FILE_PERMISSIONS = 0o600
    KEYRING_SERVICE_NAME = "nsx-client"

    @classmethod
    def load(
        cls,
        profile: str = "default",
        url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        verify_ssl: Optional[bool] = None,
    ) -> NSXConfig:
        """
        Resolve the connection settings for the specified profile.

        Args:
            profile: Profile name used for the config file and keyring lookups
            url: Explicit manager URL or host
            username: Explicit username
            password: Explicit password
            verify_ssl: Explicit TLS verification flag

        Returns:
            NSXConfig object with credentials

        Raises:
            ConfigurationError: If a setting is unresolved or the result is invalid
        """
        logger.debug(f"Loading configuration for profile: {profile}")

        settings: Dict[str, Any] = {
            "url": url,
            "username": username,
            "password": password,
            "verify_ssl": verify_ssl,
        }
        cls._merge(settings, cls._load_from_env(), "environment variables")

        if any(settings[k] is None for k in ("url", "username", "password")):
            cls._merge(settings, cls._load_from_config_file(profile), f"profile '{profile}'")

        if settings["password"] is None and settings["url"] and settings["username"]:
            settings["password"] = cls._load_password_from_keyring(
                settings["url"], settings["username"]
            )

        missing = [k for k in ("url", "username", "password") if not settings[k]]
        if missing:
            raise ConfigurationError(
                f"NSX connection settings not specified: {', '.join(missing)}. "
                f"Pass them explicitly, set environment variables "
                f"({ENV_MANAGER_URL}, {ENV_USERNAME}, {ENV_PASSWORD}) "
                f"or run 'nsx-client setup'",
                context={"profile": profile, "missing": missing},
            )

        if settings["verify_ssl"] is None:
            settings["verify_ssl"] = True

        try:
            return NSXConfig(**settings)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid NSX configuration: {e}",
                                     context={"profile": profile}) from e

    @staticmethod
    def _merge(settings: Dict[str, Any], source: Dict[str, Any], source_name: str) -> None:
        """Fill unresolved settings from ``source``."""
        filled = []
        for key, value in source.items():
            if settings.get(key) is None and value is not None:
                settings[key] = value
                filled.append(key)
        if filled:
            logger.debug(f"Loaded {', '.join(filled)} from {source_name}")

    @classmethod
    def _load_from_env(cls) -> Dict[str, Any]:
        """Load settings from environment variables."""
        verify_ssl = os.getenv(ENV_VERIFY_SSL)
        return {
            "url": os.getenv(ENV_MANAGER_URL) or None,
            "username": os.getenv(ENV_USERNAME) or None,
            "password": os.getenv(ENV_PASSWORD) or None,
            "verify_ssl": _parse_bool(verify_ssl) if verify_ssl else None,
        }

    @classmethod
    def _read_config_file(cls) -> Dict[str, Any]:
        config_file = cls.DEFAULT_CONFIG_FILE
        cls._verify_file_permissions(config_file)
        try:
            with open(config_file, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            raise ConfigurationError(f"Invalid JSON in config file: {e}") from e

    @classmethod
    def _load_from_config_file(cls, profile: str) -> Dict[str, Any]:
        """Load settings for ``profile`` from the config file."""
        if not cls.DEFAULT_CONFIG_FILE.exists():
            logger.debug(f"Config file not found: {cls.DEFAULT_CONFIG_FILE}")
            return {}

        config_data = cls._read_config_file()
        if profile not in config_data:
            logger.debug(f"Profile '{profile}' not found in config file")
            return {}

        profile_config = config_data[profile]
        return {
            "url": profile_config.get("url"),
            "username": profile_config.get("username"),
            "password": profile_config.get("password"),
            "verify_ssl": profile_config.get("verify_ssl"),
        }

    @classmethod
    def _keyring_key(cls, url: str, username: str) -> str:
        return f"{url}-{username}"

    @classmethod
    def _load_password_from_keyring(cls, url: str, username: str) -> Optional[str]:
        """Look up the password in the system keyring."""
        try:
            return keyring.get_password(
                cls.KEYRING_SERVICE_NAME, cls._keyring_key(normalize_url(url), username)
            )
        except KeyringError as e:
            logger.debug(f"Could not load password from keyring: {e}")
            return None

    @classmethod
    def save_profile(cls, profile: str, config: NSXConfig, use_keyring: bool = False) -> None:
        """
        Save configuration profile to config file.

        Args:
            profile: Profile name
            config: NSX configuration to save
            use_keyring: Store the password in the system keyring instead of the file
        """
        config_file = cls.DEFAULT_CONFIG_FILE
        config_file.parent.mkdir(parents=True, exist_ok=True)

        config_data = cls._read_config_file() if config_file.exists() else {}

        entry = {
            "url": config.url,
            "username": config.username,
            "verify_ssl": config.verify_ssl,
        }
        if use_keyring:
            keyring.set_password(cls.KEYRING_SERVICE_NAME,
                                 cls._keyring_key(config.url, config.username),
                                 config.password)
        else:
            entry["password"] = config.password
        config_data[profile] = entry

        with open(config_file, 'w') as f:
            json.dump(config_data, f, indent=2)

        cls._set_secure_permissions(config_file)

        logger.info(f"Saved profile '{profile}' to config file")

    @classmethod
    def delete_profile(cls, profile: str) -> bool:
        """
        Delete a profile from config file.

        A password the profile kept in the system keyring is removed as well,
        unless another profile still reads the same keyring entry.

        Returns:
            True if a keyring password was removed

        Raises:
            ConfigurationError: If profile doesn't exist
        """
        config_file = cls.DEFAULT_CONFIG_FILE

        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")

        config_data = cls._read_config_file()
        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        entry = config_data.pop(profile)

        with open(config_file, 'w') as f:
            json.dump(config_data, f, indent=2)

        cls._set_secure_permissions(config_file)

        logger.info(f"Deleted profile '{profile}' from config file")

        if "password" in entry or not entry.get("url") or not entry.get("username"):
            return False
        key = cls._keyring_key(normalize_url(entry["url"]), entry["username"])
        still_used = any(
            "password" not in other
            and other.get("url") and other.get("username")
            and cls._keyring_key(normalize_url(other["url"]), other["username"]) == key
            for other in config_data.values()
        )
        if still_used:
            logger.debug(f"Keyring password of '{profile}' is shared, keeping it")
            return False
        try:
            keyring.delete_password(cls.KEYRING_SERVICE_NAME, key)
        except KeyringError as e:
            logger.warning(f"Could not remove keyring password of '{profile}': {e}")
            return False
        return True

    @classmethod
    def list_profiles(cls) -> List[str]:
        """List all configured profiles."""
        if not cls.DEFAULT_CONFIG_FILE.exists():
            return []
        return list(cls._read_config_file().keys())

    @classmethod
    def get_profile_info(cls, profile: str) -> Dict[str, Any]:
        """
        Get non-sensitive information about a profile.

        Returns:
            Dictionary with URL, username and verify_ssl (never the password)

        Raises:
            ConfigurationError: If profile doesn't exist
        """
        config_file = cls.DEFAULT_CONFIG_FILE

        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")

        config_data = cls._read_config_file()
        if profile not in config_data:
            raise ConfigurationError(f"Profile '{profile}' not found")

        profile_config = config_data[profile]
        return {
            "url": profile_config["url"],
            "username": profile_config.get("username"),
            "verify_ssl": profile_config.get("verify_ssl", True),
            "password_in_keyring": "password" not in profile_config,
        }

    @classmethod
    def _set_secure_permissions(cls, file_path: Path) -> None:
        """Set secure file permissions (0600 - owner read/write only)."""
        try:
            os.chmod(file_path, cls.REQUIRED_FILE_PERMISSIONS)
            logger.debug(f"Set secure permissions on {file_path}")
        except OSError as e:
            logger.warning(f"Could not set secure permissions on {file_path}: {e}")

    @classmethod
    def _verify_file_permissions(cls, file_path: Path) -> None:
        """Verify file has secure permissions and warn if not."""
        try:
            current_perms = os.stat(file_path).st_mode & 0o777
        except OSError as e:
            logger.debug(f"Could not verify file permissions: {e}")
            return

        if current_perms != cls.REQUIRED_FILE_PERMISSIONS:
            logger.warning(
                f"Config file {file_path} has insecure permissions {oct(current_perms)}. "
                f"Recommended: {oct(cls.REQUIRED_FILE_PERMISSIONS)}"
            )
            cls._set_secure_permissions(file_path)
