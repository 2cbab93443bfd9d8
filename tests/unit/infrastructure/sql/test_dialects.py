"""
Unit tests for the dialect strategies and their statement builders.
"""

import pytest

from schemabind.errors import (
    UnsupportedDialectError,
    UnsupportedOperationError,
    UnsupportedOracleTypeError,
)
from schemabind.infrastructure.sql import (
    DeleteBuilder,
    EscapePolicy,
    InsertBuilder,
    MySQLDialect,
    OracleDialect,
    PostgreSQLDialect,
    ProcedureBuilder,
    SelectBuilder,
    SQLiteDialect,
    SQLServerDialect,
    UpdateBuilder,
    UpsertBuilder,
    get_dialect,
)
from schemabind.infrastructure.sql.dialects import SUPPORTED_DIALECTS, canonical_name
from schemabind.units import IndexUnit, ProcUnit, TableUnit


@pytest.fixture
def archive_user(make_field) -> ProcUnit:
    """A procedure taking one input."""
    return ProcUnit(
        kind="procedure",
        name="archive_user",
        sql_name="archive_user",
        signature="Callable[[int], None]",
        params=(make_field("user_id"),),
        void=True,
    )


@pytest.fixture
def count_posts(make_field) -> ProcUnit:
    """A function returning one value."""
    return ProcUnit(
        kind="function",
        name="count_posts",
        sql_name="count_posts",
        signature="Callable[[int], int]",
        params=(make_field("author_id"),),
        returns=(make_field("r0"),),
    )


class TestDialectRegistry:
    """Tests for get_dialect and canonical names."""

    @pytest.mark.parametrize(
        "alias,name",
        [
            ("postgres", "postgres"),
            ("PostgreSQL", "postgres"),
            ("pg", "postgres"),
            ("mariadb", "mysql"),
            ("sqlite3", "sqlite"),
            ("mssql", "sqlserver"),
            ("oci8", "oracle"),
        ],
    )
    def test_aliases(self, alias, name):
        """Aliases should resolve to canonical dialect names."""
        assert canonical_name(alias) == name
        assert get_dialect(alias).name == name

    def test_unknown_dialect(self):
        """Unknown dialect names should raise."""
        with pytest.raises(UnsupportedDialectError):
            get_dialect("db2")

    def test_supported_dialects(self):
        """Every registered dialect should be listed under its canonical name."""
        assert SUPPORTED_DIALECTS == ("postgres", "mysql", "sqlite", "sqlserver", "oracle")
        assert [get_dialect(name).name for name in SUPPORTED_DIALECTS] == list(SUPPORTED_DIALECTS)

    def test_oracle_type(self):
        """Oracle driver type should be kept on the dialect."""
        assert get_dialect("oracle", oracle_type="godror").oracle_type == "godror"

    def test_unknown_oracle_type(self):
        """Unknown Oracle driver types should raise."""
        with pytest.raises(UnsupportedOracleTypeError):
            get_dialect("oracle", oracle_type="odbc")

    def test_schema_and_escape_passed(self):
        """Schema and escape policy should reach the dialect."""
        dialect = get_dialect("postgres", schema="app", escape=EscapePolicy(table=True))
        assert dialect.qualify("users") == 'app."users"'


class TestInsert:
    """INSERT statements per dialect."""

    def test_postgres_returning(self, users):
        """PostgreSQL should return the sequence column."""
        statement = InsertBuilder(PostgreSQLDialect()).insert(users)
        assert statement.text == "INSERT INTO users (name, email) VALUES ($1, $2) RETURNING id"
        assert [p.name for p in statement.parameters] == ["name", "email"]

    def test_postgres_schema(self, users):
        """PostgreSQL should qualify the table with the schema."""
        statement = InsertBuilder(PostgreSQLDialect(schema="public")).insert(users)
        assert statement.text.startswith("INSERT INTO public.users (")

    def test_mysql_no_suffix(self, users):
        """MySQL inserts should have no returning suffix."""
        statement = InsertBuilder(MySQLDialect()).insert(users)
        assert statement.text == "INSERT INTO users (name, email) VALUES (?, ?)"

    def test_sqlite_no_suffix(self, users):
        """SQLite inserts should have no returning suffix."""
        statement = InsertBuilder(SQLiteDialect()).insert(users)
        assert statement.text == "INSERT INTO users (name, email) VALUES (?, ?)"

    def test_sqlserver_scope_identity(self, users):
        """SQL Server should select SCOPE_IDENTITY after the insert."""
        statement = InsertBuilder(SQLServerDialect()).insert(users)
        assert statement.text == (
            "INSERT INTO users (name, email) VALUES (@p1, @p2)"
            "; SELECT ID = CONVERT(BIGINT, SCOPE_IDENTITY())"
        )

    def test_oracle_ora_positional_out(self, users):
        """Oracle ora driver should bind the output after the inputs."""
        statement = InsertBuilder(OracleDialect()).insert(users)
        assert statement.text == "INSERT INTO users (name, email) VALUES (:1, :2) RETURNING id INTO :3"
        out = statement.outputs[0]
        assert (out.name, out.placeholder, out.position) == ("id", ":3", 2)
        assert len(statement.inputs) == 2

    def test_oracle_godror_named_out(self, users):
        """Oracle godror driver should bind the output by key name."""
        statement = InsertBuilder(OracleDialect(oracle_type="godror")).insert(users)
        assert statement.text.endswith(" RETURNING id /*LASTINSERTID*/ INTO :pk")
        assert statement.outputs[0].placeholder == ":pk"

    def test_no_sequence_no_suffix(self, tags):
        """Tables without a sequence should insert every column."""
        statement = InsertBuilder(PostgreSQLDialect()).insert(tags)
        assert statement.text == "INSERT INTO tags (id, name, email) VALUES ($1, $2, $3)"

    def test_insert_all(self, users):
        """insert_all should include sequence columns."""
        statement = InsertBuilder(PostgreSQLDialect()).insert_all(users)
        assert statement.text == "INSERT INTO users (id, name, email) VALUES ($1, $2, $3)"
        assert statement.operation.value == "insert_all"

    def test_manual_table_inserts_all(self, users):
        """Manual sequence tables should insert every column."""
        manual = TableUnit(users.name, users.sql_name, users.fields, manual=True)
        statement = InsertBuilder(PostgreSQLDialect()).insert(manual)
        assert statement.text == "INSERT INTO users (id, name, email) VALUES ($1, $2, $3)"
        assert statement.operation.value == "insert"

    def test_no_insertable_fields(self, make_field):
        """A table with only sequence columns should yield an error marker."""
        counters = TableUnit("Counter", "counters", (make_field("id", primary=True, sequence=True),))
        statement = InsertBuilder(PostgreSQLDialect()).insert(counters)
        assert statement.error == "NO INSERTABLE FIELDS: counters"
        assert statement.text == "[[ NO INSERTABLE FIELDS: counters ]]"

    @pytest.mark.parametrize("name", SUPPORTED_DIALECTS)
    def test_parameter_count(self, name, users):
        """Inputs are the non-sequence columns, or every column for insert_all."""
        builder = InsertBuilder(get_dialect(name))
        assert len(builder.insert(users).inputs) == 2
        assert len(builder.insert_all(users).inputs) == 3


class TestUpdate:
    """Tests for UpdateBuilder."""

    def test_where_continues_numbering(self, users):
        """Key placeholders should continue after the SET placeholders."""
        statement = UpdateBuilder(PostgreSQLDialect()).update(users)
        assert statement.text == "UPDATE users SET name = $1, email = $2 WHERE id = $3"
        where = statement.parameters[-1]
        assert (where.name, where.position) == ("id", 2)

    def test_composite_key(self, memberships):
        """Composite keys should be joined with AND."""
        statement = UpdateBuilder(SQLServerDialect()).update(memberships)
        assert statement.text == (
            "UPDATE memberships SET role = @p1 WHERE group_id = @p2 AND user_id = @p3"
        )

    def test_no_primary_key(self, make_field):
        """Tables without a primary key should yield an error marker."""
        logs = TableUnit("Log", "logs", (make_field("line", "str"),))
        assert UpdateBuilder(PostgreSQLDialect()).update(logs).error == "NO PRIMARY KEY: logs"

    def test_no_updatable_fields(self, make_field):
        """Tables with only key columns should yield an error marker."""
        keys = TableUnit("Key", "keys", (make_field("id", primary=True),))
        assert UpdateBuilder(PostgreSQLDialect()).update(keys).error == "NO UPDATABLE FIELDS: keys"


class TestDelete:
    """Tests for DeleteBuilder."""

    def test_single_key(self, users):
        """Single-key deletes should bind the key once."""
        statement = DeleteBuilder(PostgreSQLDialect()).delete(users)
        assert statement.text == "DELETE FROM users WHERE id = $1"

    def test_composite_key(self, memberships):
        """Composite keys should be joined with AND."""
        statement = DeleteBuilder(OracleDialect()).delete(memberships)
        assert statement.text == "DELETE FROM memberships WHERE group_id = :1 AND user_id = :2"

    @pytest.mark.parametrize("name", SUPPORTED_DIALECTS)
    def test_placeholder_count_matches_keys(self, name, memberships):
        """Every dialect should bind one placeholder per key column."""
        statement = DeleteBuilder(get_dialect(name)).delete(memberships)
        assert len(statement.parameters) == len(memberships.primary_keys)
        assert statement.text.count(" AND ") == len(memberships.primary_keys) - 1

    def test_escaped(self, users):
        """Escaped SQL Server deletes should bracket every identifier."""
        dialect = SQLServerDialect(escape=EscapePolicy(table=True, column=True))
        assert DeleteBuilder(dialect).delete(users).text == "DELETE FROM [users] WHERE [id] = @p1"

    def test_escaped_mysql_with_schema(self, users):
        """Escaped MySQL deletes should backtick schema and table."""
        dialect = MySQLDialect(schema="app", escape=EscapePolicy(True, True, True))
        assert DeleteBuilder(dialect).delete(users).text == "DELETE FROM `app`.`users` WHERE `id` = ?"

    def test_no_primary_key(self, make_field):
        """Tables without a primary key should yield an error marker."""
        logs = TableUnit("Log", "logs", (make_field("line", "str"),))
        statement = DeleteBuilder(MySQLDialect()).delete(logs)
        assert statement.text == "[[ NO PRIMARY KEY: logs ]]"


class TestUpsert:
    """Upsert strategies per dialect."""

    def test_postgres_on_conflict(self, tags):
        """PostgreSQL should upsert with ON CONFLICT DO UPDATE."""
        statement = UpsertBuilder(PostgreSQLDialect()).upsert(tags)
        assert statement.text == (
            "INSERT INTO tags (id, name, email) VALUES ($1, $2, $3)"
            " ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, email = EXCLUDED.email"
        )
        assert len(statement.parameters) == 3

    def test_sqlite_on_conflict(self, tags):
        """SQLite should upsert with ON CONFLICT DO UPDATE."""
        statement = UpsertBuilder(SQLiteDialect()).upsert(tags)
        assert "ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name, email = EXCLUDED.email" in (
            statement.text
        )

    def test_keys_only_do_nothing(self, make_field):
        """Key-only tables should upsert with DO NOTHING."""
        keys = TableUnit("Key", "keys", (make_field("id", primary=True),))
        statement = UpsertBuilder(PostgreSQLDialect()).upsert(keys)
        assert statement.text.endswith(" ON CONFLICT (id) DO NOTHING")

    def test_mysql_duplicate_key(self, users):
        """MySQL should upsert with ON DUPLICATE KEY UPDATE."""
        statement = UpsertBuilder(MySQLDialect()).upsert(users)
        assert statement.text == (
            "INSERT INTO users (id, name, email) VALUES (?, ?, ?)"
            " ON DUPLICATE KEY UPDATE name = VALUES(name), email = VALUES(email)"
        )

    def test_mysql_sequence_only(self, make_field):
        """MySQL should reassign the key when nothing else is updatable."""
        counters = TableUnit("Counter", "counters", (make_field("id", primary=True, sequence=True),))
        statement = UpsertBuilder(MySQLDialect()).upsert(counters)
        assert statement.text.endswith(" ON DUPLICATE KEY UPDATE id = VALUES(id)")

    def test_sqlserver_merge(self, tags):
        """SQL Server should upsert with a terminated MERGE."""
        statement = UpsertBuilder(SQLServerDialect()).upsert(tags)
        assert statement.text == (
            "MERGE tags AS t "
            "USING (SELECT @p1 id, @p2 name, @p3 email ) AS s "
            "ON s.id = t.id "
            "WHEN MATCHED THEN UPDATE SET t.name = s.name, t.email = s.email "
            "WHEN NOT MATCHED THEN INSERT (id, name, email) VALUES (s.id, s.name, s.email);"
        )
        assert [p.placeholder for p in statement.parameters] == ["@p1", "@p2", "@p3"]

    def test_oracle_merge_skips_sequence(self, users):
        """Oracle MERGE should leave the sequence column out of the insert."""
        statement = UpsertBuilder(OracleDialect(schema="APP")).upsert(users)
        assert statement.text == (
            "MERGE INTO APP.users t "
            "USING (SELECT :1 id, :2 name, :3 email FROM DUAL) s "
            "ON (s.id = t.id) "
            "WHEN MATCHED THEN UPDATE SET t.name = s.name, t.email = s.email "
            "WHEN NOT MATCHED THEN INSERT (name, email) VALUES (s.name, s.email)"
        )

    def test_merge_without_update_branch(self, make_field):
        """MERGE should drop WHEN MATCHED when nothing is updatable."""
        keys = TableUnit("Key", "keys", (make_field("id", primary=True),))
        statement = UpsertBuilder(SQLServerDialect()).upsert(keys)
        assert "WHEN MATCHED" not in statement.text
        assert statement.text.endswith("INSERT (id) VALUES (s.id);")

    def test_no_primary_key(self, make_field):
        """Tables without a primary key should yield an error marker."""
        logs = TableUnit("Log", "logs", (make_field("line", "str"),))
        assert UpsertBuilder(PostgreSQLDialect()).upsert(logs).error == "NO PRIMARY KEY: logs"


class TestSelectByIndex:
    """Tests for SelectBuilder."""

    def test_select(self, users):
        """Index selects should list every column and filter on the index."""
        index = IndexUnit("users_email_idx", "user_by_email", users, (users.fields[2],), is_unique=True)
        statement = SelectBuilder(PostgreSQLDialect()).select_by_index(index)
        assert statement.text == "SELECT id, name, email FROM users WHERE email = $1"

    def test_composite(self, memberships):
        """Composite indexes should be joined with AND."""
        index = IndexUnit("memberships_pkey", "membership_by_group_id_user_id", memberships,
                          memberships.primary_keys)
        statement = SelectBuilder(MySQLDialect()).select_by_index(index)
        assert statement.text.endswith("WHERE group_id = ? AND user_id = ?")

    def test_no_fields(self, users):
        """Indexes without fields should yield an error marker."""
        index = IndexUnit("broken_idx", "user_by", users, ())
        statement = SelectBuilder(PostgreSQLDialect()).select_by_index(index)
        assert statement.error == "NO INDEX FIELDS: broken_idx"


class TestProcedureCalls:
    """Routine invocation per dialect."""

    def test_postgres(self, archive_user, count_posts):
        """PostgreSQL should CALL procedures and SELECT FROM functions."""
        builder = ProcedureBuilder(PostgreSQLDialect(schema="public"))
        assert builder.call(archive_user).text == "CALL public.archive_user($1)"
        assert builder.call(count_posts).text == "SELECT * FROM public.count_posts($1)"

    def test_mysql(self, archive_user, count_posts):
        """MySQL should CALL procedures and SELECT functions."""
        builder = ProcedureBuilder(MySQLDialect())
        assert builder.call(archive_user).text == "CALL archive_user(?)"
        assert builder.call(count_posts).text == "SELECT count_posts(?)"

    def test_sqlserver(self, archive_user, count_posts):
        """SQL Server should name procedures and alias function results."""
        builder = ProcedureBuilder(SQLServerDialect(schema="dbo"))
        procedure = builder.call(archive_user)
        assert procedure.text == "dbo.archive_user"
        assert [p.placeholder for p in procedure.parameters] == ["@p1"]
        assert builder.call(count_posts).text == "SELECT dbo.count_posts(@p1) AS OUT"

    def test_oracle_procedure_named_binds(self, make_field):
        """Oracle procedures should use named binds in a PL/SQL block."""
        proc = ProcUnit(
            kind="procedure",
            name="next_id",
            sql_name="NEXT_ID",
            signature="Callable[[str], int]",
            params=(make_field("seq_name", "str", sql_name="SEQ_NAME"),),
            returns=(make_field("next_val", sql_name="NEXT_VAL"),),
        )
        statement = ProcedureBuilder(OracleDialect(schema="APP")).call(proc)
        assert statement.text == "BEGIN NEXT_ID(:SEQ_NAME, :NEXT_VAL); END;"
        assert [(p.placeholder, p.direction) for p in statement.parameters] == [
            (":SEQ_NAME", "in"),
            (":NEXT_VAL", "out"),
        ]

    def test_oracle_function(self, count_posts):
        """Oracle functions should select from dual."""
        statement = ProcedureBuilder(OracleDialect()).call(count_posts)
        assert statement.text == "SELECT count_posts(:1) FROM dual"

    def test_sqlite_unsupported(self, archive_user, count_posts):
        """SQLite should reject routine calls."""
        builder = ProcedureBuilder(SQLiteDialect())
        with pytest.raises(UnsupportedOperationError):
            builder.call(archive_user)
        with pytest.raises(UnsupportedOperationError):
            builder.call(count_posts)


class TestBuilders:
    """Tests shared by every statement builder."""

    @pytest.mark.parametrize(
        "builder",
        [InsertBuilder, UpdateBuilder, UpsertBuilder, DeleteBuilder, SelectBuilder, ProcedureBuilder],
    )
    def test_builder_documented(self, builder):
        """Every builder should describe the statement it builds."""
        assert builder.__doc__ and builder.__doc__.strip()
        assert builder(PostgreSQLDialect()).dialect.name == "postgres"
