"""Pydantic models for the git, crate file, server and OpenID config sections."""

from __future__ import annotations

from ipaddress import IPv4Address
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from ktra.common import FrozenStrings, Octet, Port, RemoteUrl

from .defaults import (
    CACHE_DIR_NAME,
    DL_DIR_NAME,
    INDEX_DIR_NAME,
    address_default,
    branch_default,
    dl_path_default,
    git_name_default,
    port_default,
)


class GitConfig(BaseModel):
    """Remotes, credentials and commit identity for the backup and index repositories.

    Both credential mechanisms may be set at once; the git sync layer decides
    which one to try. Both remote URLs are required whenever the section is present.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backup_remote_url: RemoteUrl
    backup_branch: StrictStr = Field(default_factory=branch_default)
    index_remote_url: RemoteUrl
    index_branch: StrictStr = Field(default_factory=branch_default)
    https_username: StrictStr | None = None
    https_password: StrictStr | None = None
    ssh_username: StrictStr | None = None
    ssh_pubkey_path: Path | None = None
    ssh_privkey_path: Path | None = None
    ssh_key_passphrase: StrictStr | None = None
    name: StrictStr = Field(default_factory=git_name_default)
    email: StrictStr | None = None

    @classmethod
    def unconfigured(cls) -> GitConfig:
        """Value used when the document has no ``git_config`` section at all."""
        return cls(backup_remote_url="", index_remote_url="")

    @property
    def is_configured(self) -> bool:
        return bool(self.backup_remote_url and self.index_remote_url)

    @property
    def has_https_credentials(self) -> bool:
        return self.https_username is not None and self.https_password is not None

    @property
    def has_ssh_credentials(self) -> bool:
        return self.ssh_username is not None and self.ssh_privkey_path is not None

    @staticmethod
    def index_path_relative() -> Path:
        return Path(INDEX_DIR_NAME)


class CrateFilesConfig(BaseModel):
    """Layout of uploaded crate archives."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    dl_path: FrozenStrings = Field(default_factory=dl_path_default)

    def dl_route(self) -> str:
        """Return the download route prefix, e.g. ``/dl`` or ``/v1/dl``."""
        return "/" + "/".join(self.dl_path)

    @staticmethod
    def dl_dir_path_relative() -> Path:
        return Path(DL_DIR_NAME)

    @staticmethod
    def cache_dir_path_relative() -> Path:
        return Path(CACHE_DIR_NAME)


class ServerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    address: tuple[Octet, Octet, Octet, Octet] = Field(default_factory=address_default)
    port: Port = Field(default_factory=port_default)

    @property
    def ip_address(self) -> IPv4Address:
        return IPv4Address(bytes(self.address))

    def to_socket_addr(self) -> tuple[str, int]:
        """Return a ``(host, port)`` pair accepted by ``socket.bind`` and ``asyncio`` servers."""
        return (str(self.ip_address), self.port)


class OpenIdConfig(BaseModel):
    """OpenID Connect provider settings.

    The four connection fields are required whenever the ``openid_config``
    section is present. A deployment without the section gets
    ``OpenIdConfig.unconfigured()``, which consumers detect via ``is_configured``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    issuer_url: StrictStr
    redirect_url: StrictStr
    client_id: StrictStr
    client_secret: StrictStr
    additional_scopes: FrozenStrings = ()
    gitlab_authorized_groups: FrozenStrings | None = None
    gitlab_authorized_users: FrozenStrings | None = None

    @classmethod
    def unconfigured(cls) -> OpenIdConfig:
        return cls(issuer_url="", redirect_url="", client_id="", client_secret="")

    @property
    def is_configured(self) -> bool:
        return all((self.issuer_url, self.redirect_url, self.client_id, self.client_secret))

    def scopes(self) -> list[str]:
        return ["openid", *self.additional_scopes]

    def is_authorized(self, username: str, groups: tuple[str, ...] | list[str] = ()) -> bool:
        """Check a user against the allow-lists.

        Without any allow-list every authenticated user is accepted. Otherwise
        the user must be listed by name or belong to one of the listed groups.
        """
        if self.gitlab_authorized_users is None and self.gitlab_authorized_groups is None:
            return True
        if self.gitlab_authorized_users is not None and username in self.gitlab_authorized_users:
            return True
        if self.gitlab_authorized_groups is not None:
            return any(group in self.gitlab_authorized_groups for group in groups)
        return False
