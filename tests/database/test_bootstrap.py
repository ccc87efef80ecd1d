from attendance_sheet.database.bootstrap import SCHEMA_PATH, _iter_sql_statements, _strip_create_db_and_use


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";\nSELECT 1"

    assert list(_iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", 'SELECT "x;y"', "SELECT 1"]


def test_schema_file_creates_accounts_and_sessions():
    sql = _strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8"))
    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 2
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS accounts")
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS sessions")
    assert "USE " not in sql
