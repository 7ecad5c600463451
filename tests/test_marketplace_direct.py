import dataclasses
from datetime import datetime, timezone

import pytest

from conftest import (
    BLOCK_TIMESTAMP,
    BUYER,
    ERC20_CURRENCY,
    MARKETPLACE,
    NOT_AN_NFT,
    NFT_721,
    NFT_1155,
    PRIVATE_KEY,
    SELLER,
    SIGNER,
    erc20_handlers,
    erc721_handlers,
    erc1155_handlers,
    record_sends,
)
from contractkit.constants import ADDRESS_ZERO, MAX_UINT256, NATIVE_TOKEN_ADDRESS
from contractkit.core.classes import MarketplaceDirect
from contractkit.core.wrapper import ContractWrapper
from contractkit.errors import (
    ContractKitError,
    InvalidListingError,
    ListingNotFoundError,
    ValidationError,
    WrongListingTypeError,
)
from contractkit.types import ListingType

ETHER = 10**18


def raw_listing(
    listing_id=0,
    asset=NFT_721,
    token_id=0,
    quantity=1,
    currency=NATIVE_TOKEN_ADDRESS,
    buyout=ETHER,
    listing_type=ListingType.DIRECT,
):
    return (
        listing_id,
        SELLER,
        asset,
        token_id,
        BLOCK_TIMESTAMP,
        BLOCK_TIMESTAMP + 86_400,
        quantity,
        currency,
        buyout,
        buyout,
        1,
        int(listing_type),
    )


EMPTY_LISTING = (0, ADDRESS_ZERO, ADDRESS_ZERO, 0, 0, 0, 0, ADDRESS_ZERO, 0, 0, 0, 0)


def burn(asset):
    def _revert(*_args):
        raise ValueError({"message": "execution reverted: ERC721: invalid token ID"})

    for fn in ("ownerOf", "getApproved", "tokenURI"):
        asset.handlers[fn] = _revert


@pytest.fixture()
def listings():
    return {
        0: raw_listing(),
        1: raw_listing(listing_id=1, listing_type=ListingType.AUCTION),
        2: raw_listing(listing_id=2, asset=NFT_1155, token_id=5, quantity=10, currency=ERC20_CURRENCY, buyout=2_000_000),
    }


@pytest.fixture()
def offers():
    return {}


@pytest.fixture()
def market(w3, listings, offers):
    return w3.register(
        MARKETPLACE,
        {
            "listings": lambda listing_id: listings.get(listing_id, EMPTY_LISTING),
            "offers": lambda listing_id, offeror: offers.get(
                (listing_id, offeror), (0, ADDRESS_ZERO, 0, ADDRESS_ZERO, 0, 0)
            ),
        },
    )


@pytest.fixture()
def assets(w3):
    return {
        "erc721": w3.register(NFT_721, erc721_handlers()),
        "erc1155": w3.register(NFT_1155, erc1155_handlers()),
        "currency": w3.register(ERC20_CURRENCY, erc20_handlers(allowance=lambda _o, _s: 0)),
    }


@pytest.fixture()
def direct(w3, market, assets, storage):
    storage.documents["ipfs://meta/0"] = {"name": "Genesis #0"}
    storage.documents["ipfs://meta/" + format(5, "064x") + ".json"] = {"name": "Potion"}
    wrapper = ContractWrapper(w3, MARKETPLACE, "marketplace.json", private_key=PRIVATE_KEY)
    return MarketplaceDirect(wrapper, storage)


@pytest.fixture()
def sent(direct, monkeypatch):
    return record_sends(monkeypatch, direct.contract_wrapper)


def new_listing(**overrides):
    params = {
        "asset_contract_address": NFT_721,
        "token_id": 0,
        "start_timestamp": datetime(2020, 1, 1, tzinfo=timezone.utc),
        "listing_duration_in_seconds": 3600,
        "quantity": 1,
        "currency_contract_address": NATIVE_TOKEN_ADDRESS,
        "buyout_price_per_token": "0.5",
    }
    params.update(overrides)
    return params


class TestGetListing:
    def test_maps_direct_listing(self, direct):
        listing = direct.get_listing(0)
        assert listing.id == "0"
        assert listing.seller_address == SELLER
        assert listing.buyout_price == ETHER
        assert listing.buyout_currency_value_per_token.display_value == "1.0"
        assert listing.buyout_currency_value_per_token.symbol == "MATIC"
        assert listing.asset == {"name": "Genesis #0", "id": "0", "uri": "ipfs://meta/0"}
        assert listing.type == ListingType.DIRECT

    def test_erc1155_metadata_uses_hex_id(self, direct):
        listing = direct.get_listing(2)
        assert listing.asset["name"] == "Potion"
        assert listing.buyout_currency_value_per_token.display_value == "2.0"

    def test_missing_listing(self, direct):
        with pytest.raises(ListingNotFoundError) as exc:
            direct.get_listing(99)
        assert exc.value.listing_id == "99"
        assert exc.value.code == "LISTING_NOT_FOUND"

    def test_auction_listing(self, direct):
        with pytest.raises(WrongListingTypeError) as exc:
            direct.get_listing(1)
        assert (exc.value.actual_type, exc.value.expected_type) == ("Auction", "Direct")

    def test_unreadable_token_uri(self, direct, assets):
        burn(assets["erc721"])
        listing = direct.get_listing(0)
        assert listing.asset == {"id": "0", "uri": ""}
        assert listing.buyout_price == ETHER


class TestGetActiveOffer:
    def test_no_offer(self, direct):
        assert direct.get_active_offer(0, BUYER) is None

    def test_maps_offer(self, direct, offers):
        offers[(2, BUYER)] = (2, BUYER, 3, ERC20_CURRENCY, 1_500_000, 123)
        offer = direct.get_active_offer(2, BUYER.lower())
        assert offer.buyer_address == BUYER
        assert offer.quantity_desired == 3
        assert offer.currency_value.value == 4_500_000
        assert offer.currency_value.display_value == "4.5"
        assert offer.expiration_timestamp == 123

    def test_invalid_address(self, direct):
        with pytest.raises(ValidationError):
            direct.get_active_offer(0, "nope")


class TestCreateListing:
    def test_clamps_start_time_and_returns_event_id(self, direct, market, sent):
        market.event_logs["ListingAdded"] = [{"args": {"listingId": 7}}]
        result = direct.create_listing(new_listing())

        assert result.id == 7
        assert len(sent) == 1
        call = sent[0]
        assert call["fn"] == "createListing"
        assert call["overrides"] == {"gas": 500_000}
        (params,) = call["args"]
        assert params == (
            NFT_721,
            0,
            BLOCK_TIMESTAMP,
            3600,
            1,
            NATIVE_TOKEN_ADDRESS,
            ETHER // 2,
            ETHER // 2,
            int(ListingType.DIRECT),
        )

    def test_future_start_time_is_kept(self, direct, market, sent):
        market.event_logs["ListingAdded"] = [{"args": {"listingId": 1}}]
        start = datetime.fromtimestamp(BLOCK_TIMESTAMP + 600, tz=timezone.utc)
        direct.create_listing(new_listing(start_timestamp=start))
        assert sent[0]["args"][0][2] == BLOCK_TIMESTAMP + 600

    def test_approves_marketplace_when_needed(self, direct, market, assets, sent):
        assets["erc721"].handlers["isApprovedForAll"] = lambda _owner, _operator: False
        market.event_logs["ListingAdded"] = [{"args": {"listingId": 3}}]
        direct.create_listing(new_listing())

        assert [c["fn"] for c in sent] == ["setApprovalForAll", "createListing"]
        assert sent[0]["contract"] == NFT_721
        assert sent[0]["args"] == [MARKETPLACE, True]
        assert ("isApprovedForAll", (SIGNER, MARKETPLACE)) in assets["erc721"].calls

    def test_missing_event(self, direct, sent):
        with pytest.raises(ContractKitError) as exc:
            direct.create_listing(new_listing())
        assert exc.value.code == "EVENT_NOT_FOUND"

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"quantity": 0}, "quantity"),
            ({"listing_duration_in_seconds": 0}, "listing_duration_in_seconds"),
            ({"asset_contract_address": "0x123"}, "asset_contract_address"),
            ({"buyout_price_per_token": "-1"}, "buyout_price_per_token"),
        ],
    )
    def test_invalid_params(self, direct, sent, overrides, field):
        with pytest.raises(ValidationError) as exc:
            direct.create_listing(new_listing(**overrides))
        assert exc.value.field == field
        assert sent == []

    def test_missing_field(self, direct, sent):
        params = new_listing()
        del params["quantity"]
        with pytest.raises(ValidationError, match="quantity is required"):
            direct.create_listing(params)

    def test_asset_must_be_nft(self, direct, w3, sent):
        other = w3.register(NOT_AN_NFT, {"supportsInterface": lambda _iid: False})
        with pytest.raises(ValidationError, match="ERC 1155 or ERC 721"):
            direct.create_listing(new_listing(asset_contract_address=other.address))

    def test_naive_start_timestamp(self, direct, sent):
        with pytest.raises(ValidationError) as exc:
            direct.create_listing(new_listing(start_timestamp=datetime(2020, 1, 1)))
        assert exc.value.field == "start_timestamp"
        assert sent == []


class TestMakeOffer:
    def test_rejects_native_currency(self, direct, sent):
        with pytest.raises(ValidationError, match="wrapped native token"):
            direct.make_offer(0, 1, NATIVE_TOKEN_ADDRESS, "1")
        assert sent == []

    def test_approves_and_offers(self, direct, sent):
        direct.make_offer(2, 3, ERC20_CURRENCY, "1.5")

        approve, offer = sent
        assert approve["fn"] == "approve"
        assert approve["args"] == [MARKETPLACE, 4_500_000]
        assert offer["fn"] == "offer"
        assert offer["args"] == [2, 3, ERC20_CURRENCY, 1_500_000, MAX_UINT256]

    def test_expiration_date(self, direct, sent):
        expires = datetime.fromtimestamp(BLOCK_TIMESTAMP + 60, tz=timezone.utc)
        direct.make_offer(2, 1, ERC20_CURRENCY, "1", expiration_date=expires)
        assert sent[-1]["args"][-1] == BLOCK_TIMESTAMP + 60

    def test_missing_listing(self, direct, sent):
        with pytest.raises(ListingNotFoundError):
            direct.make_offer(99, 1, ERC20_CURRENCY, "1")
        assert sent == []

    def test_listing_read_failure(self, direct, market, sent):
        def _unavailable(_listing_id):
            raise ValueError({"code": -32000, "message": "header not found"})

        market.handlers["listings"] = _unavailable
        with pytest.raises(ListingNotFoundError) as exc:
            direct.make_offer(2, 1, ERC20_CURRENCY, "1")
        assert isinstance(exc.value.__cause__, ValueError)
        assert sent == []

    def test_naive_expiration_date(self, direct, sent):
        with pytest.raises(ValidationError) as exc:
            direct.make_offer(2, 1, ERC20_CURRENCY, "1", expiration_date=datetime(2030, 1, 1))
        assert exc.value.field == "expiration_date"
        assert sent == []


class TestAcceptOffer:
    def test_uses_offer_currency_and_price(self, direct, offers, sent):
        offers[(2, BUYER)] = (2, BUYER, 3, ERC20_CURRENCY, 1_500_000, 123)
        direct.accept_offer(2, BUYER.lower())
        assert sent == [
            {
                "contract": MARKETPLACE,
                "fn": "acceptOffer",
                "args": [2, BUYER, ERC20_CURRENCY, 1_500_000],
                "overrides": {},
            }
        ]


class TestBuyoutListing:
    def test_native_currency_sends_value(self, direct, sent):
        direct.buyout_listing(0, 1)
        (buy,) = sent
        assert buy["fn"] == "buy"
        assert buy["args"] == [0, SIGNER, 1, NATIVE_TOKEN_ADDRESS, ETHER]
        assert buy["overrides"] == {"value": ETHER}

    def test_erc20_currency_approves_total(self, direct, sent):
        direct.buyout_listing(2, 4, receiver=BUYER.lower())
        approve, buy = sent
        assert approve["args"] == [MARKETPLACE, 8_000_000]
        assert buy["args"] == [2, BUYER, 4, ERC20_CURRENCY, 8_000_000]

    def test_seller_moved_erc721(self, direct, assets, sent):
        assets["erc721"].handlers["ownerOf"] = lambda _token_id: BUYER
        with pytest.raises(InvalidListingError):
            direct.buyout_listing(0, 1)
        assert sent == []

    def test_erc1155_balance_too_low(self, direct, assets, sent):
        assets["erc1155"].handlers["balanceOf"] = lambda _owner, _token_id: 2
        with pytest.raises(InvalidListingError):
            direct.buyout_listing(2, 3)

    def test_burned_token(self, direct, assets, sent):
        burn(assets["erc721"])
        with pytest.raises(InvalidListingError):
            direct.buyout_listing(0, 1)
        assert sent == []

    def test_missing_listing(self, direct, sent):
        with pytest.raises(ListingNotFoundError):
            direct.buyout_listing(99, 1)


class TestIsStillValidListing:
    def test_valid(self, direct):
        assert direct.is_still_valid_listing(direct.get_listing(0))

    def test_owner_compared_case_insensitively(self, direct, assets):
        assets["erc721"].handlers["ownerOf"] = lambda _token_id: SELLER.lower()
        assert direct.is_still_valid_listing(direct.get_listing(0))

    def test_approval_removed(self, direct, assets):
        listing = direct.get_listing(0)
        assets["erc721"].handlers["isApprovedForAll"] = lambda _owner, _operator: False
        assert not direct.is_still_valid_listing(listing)

    def test_single_token_approval_counts(self, direct, assets):
        listing = direct.get_listing(0)
        assets["erc721"].handlers["isApprovedForAll"] = lambda _owner, _operator: False
        assets["erc721"].handlers["getApproved"] = lambda _token_id: MARKETPLACE.lower()
        assert direct.is_still_valid_listing(listing)

    def test_erc1155_defaults_to_listed_quantity(self, direct, assets):
        listing = direct.get_listing(2)
        assets["erc1155"].handlers["balanceOf"] = lambda _owner, _token_id: 9
        assert not direct.is_still_valid_listing(listing)
        assert direct.is_still_valid_listing(listing, quantity=9)

    def test_burned_token(self, direct, assets):
        listing = direct.get_listing(0)
        burn(assets["erc721"])
        assert not direct.is_still_valid_listing(listing)

    def test_burned_token_without_operator_approval(self, direct, assets):
        listing = direct.get_listing(0)
        burn(assets["erc721"])
        assets["erc721"].handlers["isApprovedForAll"] = lambda _owner, _operator: False
        assert not direct.is_still_valid_listing(listing)


class TestUpdateAndCancel:
    def test_update_listing(self, direct, sent):
        listing = dataclasses.replace(direct.get_listing(0), quantity=2, buyout_price=3 * ETHER)
        direct.update_listing(listing)
        assert sent[0]["fn"] == "updateListing"
        assert sent[0]["args"] == [0, 2, 3 * ETHER, 3 * ETHER, NATIVE_TOKEN_ADDRESS, BLOCK_TIMESTAMP, BLOCK_TIMESTAMP + 86_400]

    def test_update_to_zero_quantity_is_rejected(self, direct, sent):
        listing = dataclasses.replace(direct.get_listing(0), quantity=0)
        with pytest.raises(ValidationError, match="cancel_listing"):
            direct.update_listing(listing)
        assert sent == []

    def test_cancel_listing(self, direct, sent):
        direct.cancel_listing(4)
        assert sent[0]["fn"] == "cancelDirectListing"
        assert sent[0]["args"] == [4]
