from kualitas.services.column_roles import ColumnRoles, base_amount, resolve_column_roles


def test_resolves_invoice_headers():
    roles = resolve_column_roles(["No", "Produk", "Qty", "Harga Satuan", "Subtotal", "PPN 11%", "Total"])
    assert roles == ColumnRoles(
        qty="Qty", price="Harga Satuan", subtotal="Subtotal", tax="PPN 11%", total="Total"
    )


def test_total_harga_is_not_a_price():
    roles = resolve_column_roles(["Total Harga", "Harga", "Jumlah"])
    assert roles.total == "Total Harga"
    assert roles.price == "Harga"
    assert roles.qty == "Jumlah"


def test_sub_total_spelling_variants():
    assert resolve_column_roles(["Sub Total"]).subtotal == "Sub Total"
    assert resolve_column_roles(["sub_total"]).subtotal == "sub_total"


def test_missing_roles_are_none():
    roles = resolve_column_roles(["Nama", "Alamat"])
    assert roles.as_dict() == {"qty": None, "price": None, "subtotal": None, "tax": None, "total": None}


def test_base_amount_falls_back_to_price():
    roles = ColumnRoles(price="Harga", subtotal="Subtotal")
    assert base_amount({"Harga": 1000, "Subtotal": 5000}, roles) == 5000
    assert base_amount({"Harga": 1000, "Subtotal": ""}, roles) == 1000
    assert base_amount({"Harga": 1000, "Subtotal": 0}, roles) == 1000
    assert base_amount({"Harga": 1000}, ColumnRoles(price="Harga")) == 1000


def test_base_amount_uses_qty_times_price_without_subtotal():
    roles = resolve_column_roles(["Qty", "Harga", "PPN", "Total"])
    assert base_amount({"Qty": 2, "Harga": 100000}, roles) == 200000
    assert base_amount({"Qty": None, "Harga": 100000}, roles) is None
    assert base_amount({"Qty": 2, "Harga": "abc"}, roles) is None
