"""
API key management for Kodiary.

Keys are looked up in this order:
1. Environment variables (preferred for CI/production)
2. OS keychain via keyring (secure local storage)
3. Local config file ~/.kodiary/keys.json (fallback)

Usage:
    from kodiary.keys import KeyManager

    km = KeyManager()
    km.set_key("openai", "sk-...")
    key = km.get_key("openai")
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger("kodiary.keys")

# Supported services and their env var names
SERVICES = {
    "openai": "OPENAI_API_KEY",
}


@dataclass
class KeyInfo:
    """Information about an API key."""
    service: str
    is_set: bool
    source: str  # 'env', 'keyring', 'config', 'none'
    masked_value: str  # e.g., "sk-p...abcd"


def env_var_for(service: str) -> str:
    return SERVICES.get(service, f"{service.upper()}_API_KEY")


class KeyManager:
    """Store and retrieve API keys.

    Priority order for key retrieval:
    1. Environment variable
    2. OS keychain (via keyring)
    3. Local config file (~/.kodiary/keys.json)
    """

    SERVICE_NAME = "Kodiary"
    CONFIG_DIR = Path.home() / ".kodiary"

    def __init__(self, config_dir: Optional[Path] = None, use_keyring: bool = True):
        self.config_dir = Path(config_dir) if config_dir else self.CONFIG_DIR
        self.config_file = self.config_dir / "keys.json"
        self._keyring_available = use_keyring and self._check_keyring()

    def _check_keyring(self) -> bool:
        """Check if a usable keyring backend is installed."""
        try:
            import keyring
            from keyring.backends import fail

            return not isinstance(keyring.get_keyring(), fail.Keyring)
        except Exception as e:
            logger.debug("Keyring unavailable: %s", e)
            return False

    def _read_config(self) -> dict:
        if not self.config_file.exists():
            return {}
        try:
            return json.loads(self.config_file.read_text())
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable key file %s: %s", self.config_file, e)
            return {}

    def _keyring_get(self, service: str) -> Optional[str]:
        if not self._keyring_available:
            return None
        import keyring
        from keyring.errors import KeyringError

        try:
            return keyring.get_password(self.SERVICE_NAME, service)
        except KeyringError as e:
            logger.debug("Keyring lookup failed for %s: %s", service, e)
            return None

    def _lookup(self, service: str) -> tuple[Optional[str], str]:
        service = service.lower()

        if env_val := os.getenv(env_var_for(service)):
            return env_val, "env"

        if key := self._keyring_get(service):
            return key, "keyring"

        if key := self._read_config().get(service):
            return key, "config"

        return None, "none"

    def get_key(self, service: str) -> Optional[str]:
        """Get API key for a service.

        Args:
            service: Service name (openai)

        Returns:
            API key string or None if not found
        """
        return self._lookup(service)[0]

    def set_key(self, service: str, key: str, use_keyring: bool = True) -> str:
        """Store API key for a service.

        Returns:
            Storage location used ('keyring' or 'config')
        """
        service = service.lower()

        if use_keyring and self._keyring_available:
            import keyring
            from keyring.errors import KeyringError

            try:
                keyring.set_password(self.SERVICE_NAME, service, key)
                return "keyring"
            except KeyringError as e:
                logger.warning("Keyring write failed, using config file: %s", e)

        self.config_dir.mkdir(parents=True, exist_ok=True)
        config = self._read_config()
        config[service] = key
        self.config_file.write_text(json.dumps(config, indent=2))
        self.config_file.chmod(0o600)  # Restrict permissions

        return "config"

    def delete_key(self, service: str) -> bool:
        """Delete stored API key for a service."""
        service = service.lower()
        deleted = False

        if self._keyring_available:
            import keyring
            from keyring.errors import KeyringError

            try:
                keyring.delete_password(self.SERVICE_NAME, service)
                deleted = True
            except KeyringError:
                pass  # nothing stored

        config = self._read_config()
        if service in config:
            del config[service]
            self.config_file.write_text(json.dumps(config, indent=2))
            deleted = True

        return deleted

    def get_key_info(self, service: str) -> KeyInfo:
        """Get information about a stored key."""
        key, source = self._lookup(service)
        return KeyInfo(
            service=service.lower(),
            is_set=key is not None,
            source=source,
            masked_value=self._mask_key(key) if key else "",
        )

    def list_keys(self) -> list[KeyInfo]:
        """List all configured services and their key status."""
        return [self.get_key_info(service) for service in SERVICES]

    def _mask_key(self, key: str) -> str:
        """Mask a key for display (show first 4 and last 4 chars)."""
        if len(key) <= 12:
            return "*" * len(key)
        return f"{key[:4]}...{key[-4:]}"


def get_key(service: str) -> Optional[str]:
    """Convenience function to get an API key."""
    return KeyManager().get_key(service)
