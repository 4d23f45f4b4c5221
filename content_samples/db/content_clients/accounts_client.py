"""
Accounts client for the Content API.

Used at start-up to find out whether the configured merchant is a multi-client
account (MCA) and to confirm the credentials can reach it.
"""

import logging

from content_samples.schemas.accounts import Account, AccountsAuthInfoResponse
from content_samples.utils.error_handler import ConfigurationException, ContentAPIException, ValidationException

from .base_client import BaseContentClient

logger = logging.getLogger(__name__)

MCA_MSG = "This operation can only be run on multi-client accounts."
NON_MCA_MSG = "This operation cannot be run on multi-client accounts."


class AccountsClient(BaseContentClient):
    """Client for the accounts resource (production service)."""

    async def authinfo(self) -> AccountsAuthInfoResponse:
        data = await self._request("GET", "accounts/authinfo")
        return AccountsAuthInfoResponse.model_validate(data)

    async def get_account(self, merchant_id: int, account_id: int) -> Account:
        data = await self._request("GET", f"{merchant_id}/accounts/{account_id}")
        return Account.model_validate(data)

    async def retrieve_mca_status(self, merchant_id: int) -> bool:
        """
        Determine whether ``merchant_id`` is a multi-client account.

        Accounts listed in authinfo answer directly. Otherwise the account is
        either a sub-account of a listed MCA (never an MCA itself) or not
        accessible at all, which a direct ``get`` tells apart.

        Raises:
            ConfigurationException: If the authenticated user cannot access the account
        """
        logger.info("Retrieving MCA status of configured account.")
        response = await self.authinfo()

        for identifier in response.account_identifiers:
            if identifier.aggregator_id is not None and identifier.aggregator_id == merchant_id:
                return True
            if identifier.merchant_id is not None and identifier.merchant_id == merchant_id:
                return False

        try:
            await self.get_account(merchant_id, merchant_id)
        except ContentAPIException as e:
            raise ConfigurationException(
                f"Authenticated user cannot access account ID {merchant_id}",
                config_key="merchantId",
            ) from e
        return False


def must_be_mca(is_mca: bool, message: str = MCA_MSG) -> None:
    """Gate for operations that only multi-client accounts may run."""
    if not is_mca:
        raise ValidationException(message, field="merchantId", invalid_value=is_mca)


def must_not_be_mca(is_mca: bool, message: str = NON_MCA_MSG) -> None:
    """Gate for operations that multi-client accounts may not run."""
    if is_mca:
        raise ValidationException(message, field="merchantId", invalid_value=is_mca)
