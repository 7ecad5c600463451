from contractkit.errors import (
    ContractKitError,
    InvalidListingError,
    ListingNotFoundError,
    RpcError,
    StorageError,
    TransactionError,
    ValidationError,
    WrongListingTypeError,
)


def test_hierarchy():
    for cls in (
        ValidationError,
        TransactionError,
        RpcError,
        StorageError,
        ListingNotFoundError,
        WrongListingTypeError,
        InvalidListingError,
    ):
        assert issubclass(cls, ContractKitError)


def test_str_includes_code():
    err = ValidationError("quantity must be positive", field="quantity")
    assert str(err) == "[VALIDATION_ERROR] quantity must be positive"
    assert err.field == "quantity"


def test_to_dict():
    err = TransactionError("Transaction failed: 0xabc", tx_hash="0xabc")
    assert err.to_dict() == {
        "error": "TransactionError",
        "code": "TRANSACTION_FAILED",
        "message": "Transaction failed: 0xabc",
        "tx_hash": "0xabc",
        "details": {},
    }


def test_listing_not_found_details():
    err = ListingNotFoundError("0xMarket", "42")
    assert "42" in err.message
    assert err.details == {"marketplace_address": "0xMarket", "listing_id": "42"}


def test_wrong_listing_type_message():
    err = WrongListingTypeError("0xMarket", "1", "Auction", "Direct")
    assert "Expected Direct listing, but found Auction listing" in err.message
    assert err.code == "WRONG_LISTING_TYPE"


def test_invalid_listing_reason():
    err = InvalidListingError("3", reason="seller moved the asset")
    assert err.details == {"listing_id": "3", "reason": "seller moved the asset"}
    assert "now invalid" in str(err)
