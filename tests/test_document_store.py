from concurrent.futures import ThreadPoolExecutor

from src.database.collections import CATALOG, QUOTE_THREAD, TENDER_THREAD


def test_same_key_appends_to_one_record(db):
    first = db.create_or_append(CATALOG, "Acme", {"item": "Gloves", "price": 5.0, "note": None})
    second = db.create_or_append(CATALOG, "Acme", {"item": "Masks", "price": 2.5})

    assert first["_id"] == second["_id"]
    assert [p["item"] for p in second["products"]] == ["Gloves", "Masks"]
    assert second["products"][1]["note"] is None

    records = db.list_all(CATALOG)
    assert len(records) == 1
    assert records[0]["companyName"] == "Acme"


def test_distinct_keys_listed_in_creation_order(db):
    db.create_or_append(QUOTE_THREAD, "syringes", {"quotedItem": "10ml"})
    db.create_or_append(QUOTE_THREAD, "gauze", {"quotedItem": "rolls"})

    keys = [r["QuoteRequest"] for r in db.list_all(QUOTE_THREAD)]
    assert keys == ["syringes", "gauze"]


def test_collections_are_independent(db):
    db.create_or_append(TENDER_THREAD, "Acme", {"bidItem": "x"})
    assert db.list_all(CATALOG) == []
    assert len(db.list_all(TENDER_THREAD)) == 1


def test_unknown_child_fields_are_dropped(db):
    record = db.create_or_append(CATALOG, "Acme", {"item": "Gloves", "colour": "blue"})
    product = record["products"][0]
    assert set(product) == {"_id", "item", "price", "note"}


def test_delete_child_removes_only_that_item(db):
    record = db.create_or_append(TENDER_THREAD, "T-1", {"bidItem": "a"})
    record = db.create_or_append(TENDER_THREAD, "T-1", {"bidItem": "b"})
    first_id = record["bids"][0]["_id"]

    assert db.delete_child(TENDER_THREAD, record["_id"], first_id) is True
    remaining = db.list_all(TENDER_THREAD)[0]["bids"]
    assert [b["bidItem"] for b in remaining] == ["b"]


def test_delete_and_update_miss_are_noops(db):
    record = db.create_or_append(CATALOG, "Acme", {"item": "Gloves"})
    product_id = record["products"][0]["_id"]

    assert db.delete_child(CATALOG, "missing", product_id) is False
    assert db.delete_child(CATALOG, record["_id"], "missing") is False
    assert db.update_child(CATALOG, record["_id"], "missing", {"item": "x"}) is False
    assert db.list_all(CATALOG)[0]["products"][0]["item"] == "Gloves"


def test_update_replaces_all_attributes(db):
    record = db.create_or_append(QUOTE_THREAD, "Q", {"quotedItem": "a", "quotedPrice": 3.0, "quotedNote": "n"})
    item_id = record["quotation"][0]["_id"]

    assert db.update_child(QUOTE_THREAD, record["_id"], item_id, {"quotedPrice": 4.0}) is True
    item = db.list_all(QUOTE_THREAD)[0]["quotation"][0]
    assert item == {"_id": item_id, "quotedItem": None, "quotedPrice": 4.0, "quotedNote": None}


def test_returned_documents_are_copies(db):
    record = db.create_or_append(CATALOG, "Acme", {"item": "Gloves"})
    record["products"][0]["item"] = "tampered"
    assert db.list_all(CATALOG)[0]["products"][0]["item"] == "Gloves"


def test_concurrent_creates_share_one_parent(db):
    def add(i):
        return db.create_or_append(CATALOG, "Acme", {"item": f"item-{i}"})

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(add, range(40)))

    records = db.list_all(CATALOG)
    assert len(records) == 1
    assert len(records[0]["products"]) == 40
    assert len({r["_id"] for r in results}) == 1
