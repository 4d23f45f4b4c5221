"""Pydantic models for the Content API accounts resource."""

from typing import List, Optional

from pydantic import Field

from .orders import ContentModel


class AccountIdentifier(ContentModel):
    merchant_id: Optional[int] = None
    aggregator_id: Optional[int] = None


class AccountsAuthInfoResponse(ContentModel):
    account_identifiers: List[AccountIdentifier] = Field(default_factory=list)


class AccountUser(ContentModel):
    email_address: Optional[str] = None
    admin: Optional[bool] = None


class Account(ContentModel):
    id: int
    name: Optional[str] = None
    website_url: Optional[str] = None
    users: List[AccountUser] = Field(default_factory=list)
