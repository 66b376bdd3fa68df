from __future__ import annotations

from typing import Any, Dict, List

import pytest

from kualitas_shared.models.table import Table


def make_table(rows: List[Dict[str, Any]]) -> Table:
    return Table.from_records(rows)


@pytest.fixture
def invoice_table() -> Table:
    """Small invoice sheet: row 2 has a wrong subtotal, row 3 a wrong PPN."""
    return make_table(
        [
            {"Produk": "Beras", "Qty": 2, "Harga": 500000, "Subtotal": 1000000, "PPN": 110000},
            {"Produk": "Gula", "Qty": 3, "Harga": 20000, "Subtotal": 50000, "PPN": 5500},
            {"Produk": "Minyak", "Qty": 1, "Harga": 1000000, "Subtotal": 1000000, "PPN": 50000},
        ]
    )


@pytest.fixture
def customer_table() -> Table:
    return make_table(
        [
            {"Nama": "Budi", "NIK": "3201011505990001", "Email": "budi@example.com", "Telepon": "081234567890"},
            {"Nama": "Siti", "NIK": "3171015501900002", "Email": "siti@example.co.id", "Telepon": "+6281298765432"},
            {"Nama": "Andi", "NIK": "3578010101850003", "Email": "andi@mail.com", "Telepon": "6285711112222"},
        ]
    )
