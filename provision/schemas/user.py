"""Pydantic schemas for user documents, write requests and authentication."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from provision.core.security import REDACTION_PLACEHOLDER

_LIST_FIELDS = ("sections", "accounts", "admin_accounts")


class UserBase(BaseModel):
    """Fields shared by the stored document and the write request."""

    id: str = Field(..., min_length=1, description="Stable unique user id.")
    description: str = Field(default="", description="Free-form description.")
    display_name: str = Field(default="", description="Human readable name.")
    active: bool = Field(default=False, description="Account enabled.")
    sysop: bool = Field(default=False, description="Elevated (system operator) privilege.")
    sections: list[str] = Field(default_factory=list, description="Resource sections the user may access.")
    sections_all: bool = Field(default=False, description="Grants every section regardless of sections.")
    accounts: list[str] = Field(default_factory=list, description="Accounts with standard access.")
    admin_accounts: list[str] = Field(default_factory=list, description="Accounts with administrative access.")

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def null_list_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class User(UserBase):
    """
    User document as persisted in the store.

    password holds a bcrypt hash, or is empty when no credential was ever set.
    It never holds plaintext.
    """

    password: str = Field(default="", description="Stored password hash.")

    def redacted(self) -> "User":
        """Copy of this user safe to send to clients."""
        return self.model_copy(update={"password": REDACTION_PLACEHOLDER})


class UserUpsert(UserBase):
    """
    Create/update request for a user.

    password is the plaintext secret to set. Leaving it empty, sending the
    redaction placeholder, or setting keep_password keeps the stored hash.
    """

    password: SecretStr | None = Field(default=None, description="New plaintext password.")
    keep_password: bool = Field(
        default=False,
        description="Keep the stored password hash and ignore password.",
    )

    @field_validator("password", mode="before")
    @classmethod
    def placeholder_as_missing(cls, v: Any) -> Any:
        if v is None or v == "" or v == REDACTION_PLACEHOLDER:
            return None
        return v

    @property
    def keeps_password(self) -> bool:
        return self.keep_password or self.password is None

    def to_user(self, password_hash: str) -> User:
        """Build the document to persist, carrying password_hash as the credential."""
        fields = self.model_dump(exclude={"password", "keep_password"})
        return User(**fields, password=password_hash)


class AuthRequest(BaseModel):
    """Credentials for POST /user/auth. Never persisted."""

    id: str = Field(..., description="User id.")
    password: SecretStr = Field(..., description="Plaintext password to verify.")


class AuthOutcome(BaseModel):
    """Result of an authentication attempt: unknown id, bad password, or valid."""

    found: bool
    valid: bool


class AccessCheck(BaseModel):
    """Scope a caller must hold: sections and accounts."""

    sections: list[str] = Field(default_factory=list)
    accounts: list[str] = Field(default_factory=list)


class UserResult(BaseModel):
    """Store envelope around a user document (GET /user/{id})."""

    model_config = ConfigDict(populate_by_name=True)

    index: str | None = Field(default=None, alias="_index")
    doc_id: str | None = Field(default=None, alias="_id")
    version: int | None = Field(default=None, alias="_version")
    found: bool = True
    source: User = Field(..., alias="_source")


class StoreResult(BaseModel):
    """Store acknowledgement of a write (POST /user)."""

    model_config = ConfigDict(populate_by_name=True)

    index: str | None = Field(default=None, alias="_index")
    doc_id: str | None = Field(default=None, alias="_id")
    version: int | None = Field(default=None, alias="_version")
    result: str | None = Field(default=None, description="created or updated")
