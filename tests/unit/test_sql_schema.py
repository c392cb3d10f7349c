from pathlib import Path

SQL_DIR = Path(__file__).resolve().parents[2] / "sql"


def _normalized(name: str) -> str:
    lines = [l for l in (SQL_DIR / name).read_text(encoding="utf-8").splitlines() if not l.strip().startswith("--")]
    return " ".join(" ".join(lines).lower().split())


def test_default_schema_allows_repeated_payment_reference():
    sql = _normalized("orders.sql")
    assert "create unique index" not in sql
    assert "unique" not in sql
    assert 'create index if not exists orders_payment_reference_idx on public.orders ("paymentreference")' in sql


def test_idempotent_migration_adds_unique_reference():
    sql = _normalized("orders_idempotent.sql")
    assert 'create unique index if not exists orders_payment_reference_key on public.orders ("paymentreference")' in sql
