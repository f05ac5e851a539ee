"""TikTok Marketing API client for lead generation.

Exposes the lead-form operations of the TikTok for Business open API:

- OAuth auth-code exchange
- lead subscription management (subscribe, unsubscribe, list)
- lead form listing
- test (mock) lead lifecycle
- lead export and download

Every operation is a single blocking round trip except the test-lead and
lead-export flows, which chain two or three calls. Errors from any step
propagate; earlier steps are not undone.
"""

import time
from typing import Optional, Tuple

from loguru import logger

from tiktok_marketing.core.config import ClientConfig
from tiktok_marketing.core.constants import (
    BUSINESS_TYPE_LEAD_GEN,
    LEAD_TASK_WAIT_SECONDS,
    SUBSCRIPTION_OBJECT_LEAD,
    HTTPMethod,
)
from tiktok_marketing.core.exceptions import ConfigurationError
from tiktok_marketing.core.protocols import AdvertiserLike, HTTPSession
from tiktok_marketing.domain.models import JsonValue, RequestOptions
from tiktok_marketing.endpoints import TikTokEndPoint
from tiktok_marketing.http_client import TikTokHTTPClient


class TikTokAPIClient:
    """Client for the TikTok Marketing API lead endpoints.

    Credentials are fixed at construction. Missing values are read from
    ``TIKTOK_APP_ID`` and ``TIKTOK_SECRET``.

    Example:
        >>> client = TikTokAPIClient()
        >>> advertiser = Advertiser("7000000000000000000", "act.xxx")
        >>> forms = client.get_forms(advertiser)
    """

    def __init__(
        self,
        app_id: Optional[str] = None,
        secret: Optional[str] = None,
        session: Optional[HTTPSession] = None,
        timeout: Optional[float] = None,
        config: Optional[ClientConfig] = None,
    ):
        """Initialize the API client.

        Args:
            app_id: Application id (default: ``TIKTOK_APP_ID``)
            secret: Application secret (default: ``TIKTOK_SECRET``)
            session: Optional HTTP transport
            timeout: Optional request timeout in seconds
            config: Prepared configuration; replaces the three values above
        """
        if config is None:
            config = ClientConfig.resolve(app_id=app_id, secret=secret, timeout=timeout)
        self.http = TikTokHTTPClient(config, session=session)

    @classmethod
    def from_config(
        cls, config: ClientConfig, session: Optional[HTTPSession] = None
    ) -> "TikTokAPIClient":
        """Create a client from a prepared configuration."""
        return cls(session=session, config=config)

    @property
    def config(self) -> ClientConfig:
        return self.http.config

    @property
    def app_id(self) -> str:
        return self.config.app_id

    @property
    def secret(self) -> str:
        return self.config.secret

    def close(self) -> None:
        """Release the HTTP session if the client created it."""
        self.http.close()

    def __enter__(self) -> "TikTokAPIClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ============================================================================
    # Authentication
    # ============================================================================

    def get_access_token(
        self, auth_code: Optional[str] = None, options: Optional[RequestOptions] = None
    ) -> JsonValue:
        """Exchange an OAuth authorization code for an access token.

        Args:
            auth_code: Code received on the OAuth redirect (``?auth_code=``)
            options: Optional sandbox / TLS options

        Returns:
            Token payload (``access_token``, ``advertiser_ids``, ``scope``)

        Raises:
            ConfigurationError: If no auth code is given
        """
        if not auth_code:
            raise ConfigurationError(
                "auth_code missing. Did you initialize the authentication flow?"
            )

        return self.http.execute(
            TikTokEndPoint.ACCESS_TOKEN,
            {"auth_code": auth_code},
            options=options,
        )

    # ============================================================================
    # Lead subscriptions
    # ============================================================================

    def subscribe_to_leads(
        self,
        advertiser: AdvertiserLike,
        form_id: str,
        callback_url: str,
        options: Optional[RequestOptions] = None,
    ) -> JsonValue:
        """Subscribe a callback URL to new leads of one form.

        Args:
            advertiser: Advertiser owning the form
            form_id: Lead form (page) id
            callback_url: URL TikTok will POST new leads to
            options: Optional sandbox / TLS options

        Returns:
            Subscription payload (``subscription_id``)
        """
        advertiser_id, access_token = self.get_advertiser_data(advertiser)

        return self.http.execute(
            TikTokEndPoint.SUBSCRIBE,
            {
                "subscription_detail": {
                    "advertiser_id": advertiser_id,
                    "access_token": access_token,
                    "page_id": form_id,
                },
                "object": SUBSCRIPTION_OBJECT_LEAD,
                "url": callback_url,
            },
            options=options,
        )

    def unsubscribe_to_leads(
        self, subscription_id: str, options: Optional[RequestOptions] = None
    ) -> JsonValue:
        """Cancel a lead subscription.

        Args:
            subscription_id: Id returned by :meth:`subscribe_to_leads`
            options: Optional sandbox / TLS options
        """
        return self.http.execute(
            TikTokEndPoint.UNSUBSCRIBE,
            {"subscription_id": subscription_id},
            options=options,
        )

    def get_subscriptions(self, options: Optional[RequestOptions] = None) -> JsonValue:
        """List the application's lead subscriptions."""
        return self.http.execute(
            TikTokEndPoint.SUBSCRIPTIONS,
            {"object": SUBSCRIPTION_OBJECT_LEAD},
            method=HTTPMethod.GET,
            options=options,
        )

    # ============================================================================
    # Lead forms
    # ============================================================================

    def get_forms(
        self,
        advertiser: AdvertiserLike,
        full: bool = False,
        sandbox: bool = False,
        options: Optional[RequestOptions] = None,
    ) -> JsonValue:
        """List the advertiser's lead generation forms.

        Args:
            advertiser: Advertiser owning the forms
            full: Return the whole payload (``list`` and ``page_info``)
                instead of only the form list
            sandbox: Query the sandbox environment
            options: Optional sandbox / TLS options; overrides ``sandbox``

        Returns:
            List of forms, or the full payload when ``full`` is set.
            Never None: an empty result becomes ``[]``.
        """
        advertiser_id, access_token = self.get_advertiser_data(advertiser)

        if options is None:
            options = RequestOptions(sandbox=sandbox, verify_ssl=self.config.verify_ssl)

        result = self.http.execute(
            TikTokEndPoint.PAGES,
            {
                "business_type": BUSINESS_TYPE_LEAD_GEN,
                "advertiser_id": advertiser_id,
                "access_token": access_token,
            },
            method=HTTPMethod.GET,
            options=options,
        )

        if not full and isinstance(result, dict) and "list" in result:
            result = result["list"]

        return result or []

    # ============================================================================
    # Test leads
    # ============================================================================

    def create_test_lead(
        self,
        advertiser: AdvertiserLike,
        page_id: str,
        options: Optional[RequestOptions] = None,
    ) -> JsonValue:
        """Replace the form's test lead with a fresh one.

        Any existing test lead is deleted first; a form holds at most one.

        Args:
            advertiser: Advertiser owning the form
            page_id: Lead form (page) id
            options: Optional sandbox / TLS options

        Returns:
            Created test lead payload
        """
        self.delete_test_lead(advertiser, page_id, options=options)

        advertiser_id, access_token = self.get_advertiser_data(advertiser)

        logger.info(f"Creating test lead for page {page_id}")
        return self.http.execute(
            TikTokEndPoint.MOCK_LEAD_CREATE,
            {
                "advertiser_id": advertiser_id,
                "access_token": access_token,
                "page_id": page_id,
            },
            options=options,
        )

    def delete_test_lead(
        self,
        advertiser: AdvertiserLike,
        page_id: str,
        options: Optional[RequestOptions] = None,
    ) -> JsonValue:
        """Delete the form's test lead, if there is one.

        Args:
            advertiser: Advertiser owning the form
            page_id: Lead form (page) id
            options: Optional sandbox / TLS options

        Returns:
            The delete result, or the fetched lead unchanged when it carries
            no ``meta_data`` (nothing to delete)
        """
        advertiser_id, access_token = self.get_advertiser_data(advertiser)

        lead = self.get_test_lead(advertiser, page_id, options=options)

        if not isinstance(lead, dict) or lead.get("meta_data") is None:
            logger.debug(f"No test lead to delete for page {page_id}")
            return lead

        lead_id = lead["meta_data"]["lead_id"]
        logger.info(f"Deleting test lead {lead_id} for page {page_id}")

        return self.http.execute(
            TikTokEndPoint.MOCK_LEAD_DELETE,
            {
                "advertiser_id": advertiser_id,
                "access_token": access_token,
                "lead_id": lead_id,
            },
            options=options,
        )

    def get_test_lead(
        self,
        advertiser: AdvertiserLike,
        page_id: str,
        options: Optional[RequestOptions] = None,
    ) -> JsonValue:
        """Fetch the form's current test lead."""
        advertiser_id, access_token = self.get_advertiser_data(advertiser)

        return self.http.execute(
            TikTokEndPoint.MOCK_LEAD_GET,
            {
                "advertiser_id": advertiser_id,
                "access_token": access_token,
                "page_id": page_id,
            },
            method=HTTPMethod.GET,
            options=options,
        )

    # ============================================================================
    # Leads
    # ============================================================================

    def get_leads(
        self,
        advertiser: AdvertiserLike,
        page_id: str,
        options: Optional[RequestOptions] = None,
    ) -> JsonValue:
        """Export and download the form's leads.

        Requests an export task, waits a fixed ``LEAD_TASK_WAIT_SECONDS``
        and downloads the task result. The task status is not checked.

        Args:
            advertiser: Advertiser owning the form
            page_id: Lead form (page) id
            options: Optional sandbox / TLS options

        Returns:
            Download result (lead rows, or raw CSV text)
        """
        advertiser_id, access_token = self.get_advertiser_data(advertiser)

        task = self.http.execute(
            TikTokEndPoint.LEAD_TASK,
            {
                "advertiser_id": advertiser_id,
                "access_token": access_token,
                "page_id": page_id,
            },
            method=HTTPMethod.GET,
            options=options,
        )

        # TODO: poll the task status instead of a fixed wait once the
        # export status field is confirmed with the API owners.
        logger.info(f"Waiting {LEAD_TASK_WAIT_SECONDS}s for lead export task")
        time.sleep(LEAD_TASK_WAIT_SECONDS)

        return self.http.execute(
            TikTokEndPoint.LEAD_TASK_DOWNLOAD,
            {
                "advertiser_id": advertiser_id,
                "access_token": access_token,
                "task_id": task["task_id"],
            },
            method=HTTPMethod.GET,
            options=options,
        )

    @staticmethod
    def get_advertiser_data(advertiser: AdvertiserLike) -> Tuple[str, str]:
        """Return the ``(advertiser_id, access_token)`` pair of an advertiser."""
        return advertiser.advertiser_id, advertiser.access_token
