"""Direct listings on a marketplace contract.

A direct listing sells ERC721/ERC1155 tokens at a fixed buyout price per
token. Sellers create, update and cancel listings. Buyers either buy out
immediately or make offers that the seller may accept.

Before a write that would revert on-chain, this class checks the
preconditions it can read: the listing exists and is direct, the
seller still holds and has approved the asset, and the buyer has
approved enough currency.

Example:
    >>> sdk = ContractKitSDK(network=Network.POLYGON, private_key="0x...")
    >>> marketplace = sdk.get_marketplace("0x...")
    >>> listing = marketplace.direct.get_listing(0)
    >>> marketplace.direct.buyout_listing(0, quantity_desired=1)
"""
from datetime import datetime
from typing import Optional, Sequence, Union

from web3 import Web3
from web3.exceptions import Web3Exception

from contractkit.common.currency import (
    fetch_currency_value,
    is_native_token,
    normalize_price_value,
    set_erc20_allowance,
)
from contractkit.common.marketplace import (
    handle_token_approval,
    is_token_approved_for_marketplace,
    map_offer,
    validate_new_listing_param,
)
from contractkit.common.nft import bind_contract, detect_token_type, fetch_token_metadata_for_contract
from contractkit.constants import ADDRESS_ZERO, CREATE_LISTING_GAS_LIMIT, MAX_UINT256
from contractkit.core.wrapper import ContractWrapper
from contractkit.errors import (
    ContractKitError,
    InvalidListingError,
    ListingNotFoundError,
    ValidationError,
    WrongListingTypeError,
)
from contractkit.schema.marketplace import NewDirectListing
from contractkit.storage.types import Storage
from contractkit.types.currency import Price
from contractkit.types.marketplace import DirectListing, ListingType, Offer, TokenType
from contractkit.types.transactions import TransactionResult, TransactionResultWithId
from contractkit.utils.logging import LogContext, get_logger

_logger = get_logger(__name__)

# Field order of the public ``listings(uint256)`` getter
LISTING_FIELDS = (
    "listing_id",
    "token_owner",
    "asset_contract",
    "token_id",
    "start_time",
    "end_time",
    "quantity",
    "currency",
    "reserve_price_per_token",
    "buyout_price_per_token",
    "token_type",
    "listing_type",
)


class MarketplaceDirect:
    """Handles direct listings."""

    def __init__(self, contract_wrapper: ContractWrapper, storage: Storage):
        self.contract_wrapper = contract_wrapper
        self.storage = storage
        self._log = LogContext(_logger, {"marketplace": contract_wrapper.get_address()})

    def get_address(self) -> str:
        return self.contract_wrapper.get_address()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_listing(self, listing_id: int) -> DirectListing:
        """Get a direct listing by id.

        Args:
            listing_id: The listing id

        Returns:
            The mapped DirectListing

        Raises:
            ListingNotFoundError: If no listing exists with this id
            WrongListingTypeError: If the listing is an auction
        """
        raw = self.contract_wrapper.read_contract.functions.listings(int(listing_id)).call()
        listing = listing_from_raw(raw)

        if listing["asset_contract"] == ADDRESS_ZERO:
            raise ListingNotFoundError(self.get_address(), str(listing_id))

        if listing["listing_type"] != ListingType.DIRECT:
            raise WrongListingTypeError(self.get_address(), str(listing_id), "Auction", "Direct")

        return self.map_listing(listing)

    def get_active_offer(self, listing_id: int, address: str) -> Optional[Offer]:
        """Get the active offer made by ``address`` on a listing.

        Returns:
            The Offer, or None if ``address`` has no offer on this listing
        """
        self._validate_listing(listing_id)
        if not Web3.is_address(address):
            raise ValidationError("Address must be a valid address", field="address")

        raw = self.contract_wrapper.read_contract.functions.offers(
            int(listing_id), Web3.to_checksum_address(address)
        ).call()
        if raw[1] == ADDRESS_ZERO:
            return None
        return map_offer(self.contract_wrapper.get_provider(), listing_id, raw)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def create_listing(self, listing: Union[NewDirectListing, dict]) -> TransactionResultWithId[int]:
        """Create a new direct listing.

        Approves the marketplace on the asset contract when needed. A start
        time in the past is moved to the latest block timestamp.

        Args:
            listing: New listing parameters

        Returns:
            Receipt and the id of the new listing

        Example:
            >>> result = marketplace.direct.create_listing(NewDirectListing(
            ...     asset_contract_address="0x...",
            ...     token_id=0,
            ...     start_timestamp=datetime.now(timezone.utc),
            ...     listing_duration_in_seconds=86400,
            ...     quantity=1,
            ...     currency_contract_address=NATIVE_TOKEN_ADDRESS,
            ...     buyout_price_per_token="1.5",
            ... ))
            >>> result.id
            7
        """
        params = validate_new_listing_param(listing)
        w3 = self.contract_wrapper.get_provider()

        handle_token_approval(
            self.contract_wrapper,
            self.get_address(),
            params.asset_contract_address,
            params.token_id,
            self.contract_wrapper.get_signer_address(),
        )

        normalized_price_per_token = normalize_price_value(
            w3,
            params.buyout_price_per_token,
            params.currency_contract_address,
        )

        listing_start_time = int(params.start_timestamp.timestamp())
        block_time = w3.eth.get_block("latest")["timestamp"]
        if listing_start_time < block_time:
            listing_start_time = block_time

        listing_params = (
            params.asset_contract_address,
            params.token_id,
            listing_start_time,
            params.listing_duration_in_seconds,
            params.quantity,
            params.currency_contract_address,
            normalized_price_per_token,  # reserve price is ignored for direct listings
            normalized_price_per_token,
            int(ListingType.DIRECT),
        )
        receipt = self.contract_wrapper.send_transaction(
            "createListing",
            [listing_params],
            {"gas": CREATE_LISTING_GAS_LIMIT},
        )

        events = self.contract_wrapper.parse_logs("ListingAdded", receipt)
        if not events:
            raise ContractKitError("ListingAdded event not found", code="EVENT_NOT_FOUND")
        listing_id = events[0]["args"]["listingId"]
        self._log.info("Direct listing created", extra={"listing_id": listing_id})
        return TransactionResultWithId(receipt=receipt, id=listing_id)

    def make_offer(
        self,
        listing_id: int,
        quantity_desired: int,
        currency_contract_address: str,
        price_per_token: Price,
        expiration_date: Optional[datetime] = None,
    ) -> TransactionResult:
        """Make an offer on a direct listing.

        Offers are escrowed as ERC20 allowance, so native currency must be
        offered as its wrapped token.

        Args:
            listing_id: The listing to make an offer on
            quantity_desired: Number of tokens wanted
            currency_contract_address: ERC20 currency of the offer
            price_per_token: Human-readable price per token
            expiration_date: When the offer expires, timezone-aware (never by default)

        Raises:
            ValidationError: If the currency is the native token or the expiration date has no timezone
            ListingNotFoundError: If the listing cannot be read
        """
        if expiration_date is not None and expiration_date.tzinfo is None:
            raise ValidationError("expiration_date must be timezone-aware", field="expiration_date")
        if is_native_token(currency_contract_address):
            raise ValidationError(
                "You must use the wrapped native token address when making an offer with a native token",
                field="currency_contract_address",
            )

        normalized_price = normalize_price_value(
            self.contract_wrapper.get_provider(),
            price_per_token,
            currency_contract_address,
        )

        try:
            self.get_listing(listing_id)
        except (ContractKitError, Web3Exception, ValueError) as e:
            self._log.error("Failed to get listing", extra={"listing_id": listing_id, "error": str(e)})
            raise ListingNotFoundError(self.get_address(), str(listing_id)) from e

        quantity = int(quantity_desired)
        value = normalized_price * quantity
        overrides = self.contract_wrapper.get_call_overrides()
        set_erc20_allowance(self.contract_wrapper, value, currency_contract_address, overrides)

        expiration_timestamp = MAX_UINT256
        if expiration_date is not None:
            expiration_timestamp = int(expiration_date.timestamp())

        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "offer",
                [
                    int(listing_id),
                    quantity,
                    Web3.to_checksum_address(currency_contract_address),
                    normalized_price,
                    expiration_timestamp,
                ],
                overrides,
            )
        )

    def accept_offer(self, listing_id: int, address_of_offeror: str) -> TransactionResult:
        """Accept an offer on one of the signer's direct listings."""
        # TODO: surface a clearer error than the contract revert when the offer is too low
        self._validate_listing(listing_id)
        offeror = Web3.to_checksum_address(address_of_offeror)
        offer = self.contract_wrapper.read_contract.functions.offers(int(listing_id), offeror).call()
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "acceptOffer",
                [int(listing_id), offeror, offer[3], offer[4]],
            )
        )

    def buyout_listing(
        self,
        listing_id: int,
        quantity_desired: int,
        receiver: Optional[str] = None,
    ) -> TransactionResult:
        """Buy a direct listing.

        Args:
            listing_id: The listing id to buy
            quantity_desired: The quantity to buy
            receiver: Receiver of the bought tokens, the signer by default

        Raises:
            InvalidListingError: If the seller no longer holds or approved the asset

        Example:
            >>> marketplace.direct.buyout_listing(listing_id=0, quantity_desired=1)
        """
        listing = self._validate_listing(listing_id)
        if not self.is_still_valid_listing(listing, quantity_desired):
            raise InvalidListingError(str(listing_id))

        buy_for = Web3.to_checksum_address(receiver) if receiver else self.contract_wrapper.get_signer_address()
        quantity = int(quantity_desired)
        value = listing.buyout_price * quantity
        overrides = self.contract_wrapper.get_call_overrides()
        set_erc20_allowance(self.contract_wrapper, value, listing.currency_contract_address, overrides)

        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "buy",
                [int(listing_id), buy_for, quantity, listing.currency_contract_address, value],
                overrides,
            )
        )

    def update_listing(self, listing: DirectListing) -> TransactionResult:
        """Update a direct listing.

        A quantity of 0 is rejected; use ``cancel_listing`` to remove a listing.
        """
        if listing.quantity <= 0:
            raise ValidationError(
                "Cannot update a listing to quantity 0, use cancel_listing instead",
                field="quantity",
            )
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction(
                "updateListing",
                [
                    int(listing.id),
                    listing.quantity,
                    listing.buyout_price,  # reserve price, unused for direct listings
                    listing.buyout_price,
                    listing.currency_contract_address,
                    listing.start_time_in_seconds,
                    listing.seconds_until_end,
                ],
            )
        )

    def cancel_listing(self, listing_id: int) -> TransactionResult:
        """Cancel a direct listing.

        Example:
            >>> marketplace.direct.cancel_listing(0)
        """
        return TransactionResult(
            receipt=self.contract_wrapper.send_transaction("cancelDirectListing", [int(listing_id)])
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _validate_listing(self, listing_id: int) -> DirectListing:
        try:
            return self.get_listing(listing_id)
        except ContractKitError:
            self._log.error("Error getting the listing", extra={"listing_id": listing_id})
            raise

    def map_listing(self, listing: dict) -> DirectListing:
        """Map a raw ``listings`` result (keyed by LISTING_FIELDS) to a DirectListing."""
        w3 = self.contract_wrapper.get_provider()
        return DirectListing(
            id=str(listing["listing_id"]),
            asset_contract_address=listing["asset_contract"],
            token_id=listing["token_id"],
            start_time_in_seconds=listing["start_time"],
            seconds_until_end=listing["end_time"],
            quantity=listing["quantity"],
            currency_contract_address=listing["currency"],
            buyout_currency_value_per_token=fetch_currency_value(
                w3, listing["currency"], listing["buyout_price_per_token"]
            ),
            buyout_price=listing["buyout_price_per_token"],
            seller_address=listing["token_owner"],
            asset=fetch_token_metadata_for_contract(
                listing["asset_contract"], w3, listing["token_id"], self.storage
            ),
            type=ListingType.DIRECT,
        )

    def is_still_valid_listing(self, listing: DirectListing, quantity: Optional[int] = None) -> bool:
        """Check whether a direct listing can still be bought.

        A listing becomes invalid when the seller transferred or burned the
        asset, or removed the marketplace approval.

        Args:
            listing: The listing to check
            quantity: Quantity to buy (ERC1155), the listed quantity by default

        Returns:
            True if the listing is valid, False otherwise
        """
        w3 = self.contract_wrapper.get_provider()
        try:
            approved = is_token_approved_for_marketplace(
                w3,
                self.get_address(),
                listing.asset_contract_address,
                listing.token_id,
                listing.seller_address,
            )
            if not approved:
                return False

            token_type = detect_token_type(w3, listing.asset_contract_address)
            if token_type == TokenType.ERC721:
                asset = bind_contract(w3, listing.asset_contract_address, "erc721.json")
                owner = asset.functions.ownerOf(listing.token_id).call()
                return owner.lower() == listing.seller_address.lower()
            if token_type == TokenType.ERC1155:
                asset = bind_contract(w3, listing.asset_contract_address, "erc1155.json")
                balance = asset.functions.balanceOf(listing.seller_address, listing.token_id).call()
                return balance >= (quantity or listing.quantity)
        except (Web3Exception, ValueError) as e:
            # ownerOf and getApproved revert once the token is burned
            self._log.warning(
                "Could not read listed asset",
                extra={"listing_id": listing.id, "asset_contract": listing.asset_contract_address, "error": str(e)},
            )
            return False

        self._log.error(
            "Contract does not implement ERC 1155 or ERC 721.",
            extra={"asset_contract": listing.asset_contract_address},
        )
        return False


def listing_from_raw(raw: Sequence) -> dict:
    """Key a raw ``listings`` tuple by field name."""
    return dict(zip(LISTING_FIELDS, raw))
