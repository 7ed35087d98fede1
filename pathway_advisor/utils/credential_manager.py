"""
Credential Manager Module
Handles Gemini API key storage and retrieval with CLI prompts.
"""

import os
from pathlib import Path
from typing import Optional

import structlog
from dotenv import load_dotenv, set_key
from rich.console import Console
from rich.prompt import Prompt

from pathway_advisor.models.config import API_KEY_ENV_VARS

console = Console()
logger = structlog.get_logger(__name__)


class MissingCredentialError(ValueError):
    """Raised when a required credential is not configured."""


class CredentialManager:
    """Manages credentials with secure storage and CLI prompting."""

    def __init__(self, env_file: Path = Path(".env")):
        """
        Initialize credential manager.

        Args:
            env_file: Path to .env file for credential storage
        """
        self.env_file = env_file
        logger.info("credential_manager_initialized", env_file=str(env_file))
        self._load_credentials()

    def _load_credentials(self) -> None:
        """Load existing credentials from .env file."""
        if self.env_file.exists():
            load_dotenv(self.env_file)
            logger.info("credentials_loaded_from_env", env_file=str(self.env_file))
            self._set_secure_permissions()
        else:
            example_file = Path(".env.example")
            if example_file.exists():
                console.print(
                    "[yellow][i] No .env file found. Creating from .env.example...[/yellow]"
                )
                logger.info("creating_env_from_example")
                self.env_file.write_text(example_file.read_text(encoding="utf-8"))
                self._set_secure_permissions()
            else:
                logger.warning("no_env_file_or_example_found")

    def _set_secure_permissions(self) -> None:
        """Set secure file permissions on .env file (Unix only)."""
        if os.name == "nt":
            logger.debug("skipping_permissions_windows", env_file=str(self.env_file))
            return
        try:
            os.chmod(self.env_file, 0o600)
            logger.info("secure_permissions_set", env_file=str(self.env_file), mode="0600")
        except OSError as e:
            console.print(
                f"[yellow][!] Could not set secure permissions on .env: {e}[/yellow]"
            )
            logger.warning(
                "failed_to_set_permissions", env_file=str(self.env_file), error=str(e)
            )

    def get_credential(
        self,
        key: str,
        prompt_message: str,
        is_password: bool = False,
        required: bool = True,
        interactive: bool = True,
    ) -> Optional[str]:
        """
        Get credential from environment or prompt user.

        Args:
            key: Environment variable name (e.g., "GEMINI_API_KEY")
            prompt_message: Message to display when prompting
            is_password: Whether to mask input
            required: Whether credential is required
            interactive: Whether prompting is allowed; when False a missing
                required credential fails immediately

        Returns:
            Credential value or None if optional and not provided

        Raises:
            MissingCredentialError: If required credential not provided
        """
        value = os.getenv(key)
        if value:
            logger.debug("credential_found_in_env", key=key, is_password=is_password)
            return value

        if not interactive:
            if required:
                logger.error("required_credential_not_provided", key=key)
                raise MissingCredentialError(f"Required credential not provided: {key}")
            return None

        logger.info(
            "prompting_for_credential",
            key=key,
            is_password=is_password,
            required=required,
        )
        console.print(f"\n[yellow][*] Credential Required: {key}[/yellow]")
        console.print(f"   {prompt_message}\n")

        if is_password:
            value = Prompt.ask("   Enter value", password=True)
        else:
            value = Prompt.ask("   Enter value")

        if not value and required:
            logger.error("required_credential_not_provided", key=key)
            raise MissingCredentialError(f"Required credential not provided: {key}")

        if value:
            self._save_credential(key, value)

        return value or None

    def _save_credential(self, key: str, value: str) -> None:
        """
        Save credential to .env file.

        Args:
            key: Environment variable name
            value: Credential value
        """
        try:
            set_key(self.env_file, key, value)
            os.environ[key] = value
            console.print(f"   [green][+] Saved {key} to .env[/green]\n")
            logger.info("credential_saved", key=key, env_file=str(self.env_file))
        except OSError as e:
            console.print(f"   [red][X] Failed to save credential: {e}[/red]\n")
            logger.error("failed_to_save_credential", key=key, error=str(e))
            raise

    def get_gemini_api_key(self, interactive: bool = True) -> str:
        """
        Return the Gemini API key, prompting for it when allowed.

        Any of the recognised key variables satisfies the lookup; a prompted
        value is saved under the first one (GEMINI_API_KEY).

        Raises:
            MissingCredentialError: If no key is configured or entered
        """
        for key in API_KEY_ENV_VARS:
            value = os.getenv(key)
            if value:
                logger.debug("credential_found_in_env", key=key, is_password=True)
                return value

        value = self.get_credential(
            API_KEY_ENV_VARS[0],
            "Gemini API key (https://aistudio.google.com/app/apikey)",
            is_password=True,
            required=True,
            interactive=interactive,
        )
        if value is None:
            raise MissingCredentialError(
                f"Required credential not provided: {API_KEY_ENV_VARS[0]}"
            )
        return value

    @staticmethod
    def mask_credential(value: str, show_chars: int = 3) -> str:
        """
        Mask credential for display in logs.

        Args:
            value: Credential value to mask
            show_chars: Number of characters to show at start

        Returns:
            Masked credential (e.g., "abc***")
        """
        if not value or len(value) <= show_chars:
            return "***"
        return f"{value[:show_chars]}{'*' * (len(value) - show_chars)}"
