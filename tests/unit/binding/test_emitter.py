"""Unit tests for BindingEmitter."""

from dataclasses import replace

import pytest

from schemabind.binding import (
    BindingEmitter,
    EnumBinding,
    QueryBinding,
    SignatureBuilder,
    TableBinding,
    file_name,
    proc_prefix,
)
from schemabind.errors import UnsupportedOperationError
from schemabind.infrastructure.sql import OracleDialect, PostgreSQLDialect, SQLiteDialect
from schemabind.types import TypeMapper
from schemabind.units import (
    EnumUnit,
    EnumValueUnit,
    ForeignKeyUnit,
    IndexUnit,
    ProcUnit,
    QueryParamUnit,
    QueryUnit,
    TableUnit,
)


def make_emitter(resolver, dialect=None, single=None):
    dialect = dialect or PostgreSQLDialect()
    return BindingEmitter(dialect, resolver, SignatureBuilder(resolver, TypeMapper(dialect)), single)


@pytest.fixture
def emitter(resolver):
    return make_emitter(resolver)


class TestFileNames:
    """Tests for output file names."""

    def test_file_name(self):
        """File names should be lower-cased with the extension added."""
        assert file_name("UserAccount") == "useraccount.py"
        assert file_name("count_posts", "sf_") == "sf_count_posts.py"

    def test_proc_prefix(self):
        """Functions should use sf_ and procedures sp_."""
        assert proc_prefix("function") == "sf_"
        assert proc_prefix("procedure") == "sp_"


class TestEmitTable:
    """Tests for table, view and query type bindings."""

    def test_table_statements(self, emitter, users):
        """Tables with a key should carry CRUD statements and calls."""
        binding = emitter.emit_table(users)
        assert isinstance(binding, TableBinding)
        assert binding.dest == "user.py"
        assert binding.short == "u"
        assert list(binding.statements) == ["insert", "update", "upsert", "delete"]
        assert binding.statements["delete"].text == "DELETE FROM users WHERE id = $1"
        assert binding.calls["insert"] == "cursor.execute(sqlstr, [self.name, self.email])"
        assert binding.logs["delete"] == "logf(sqlstr, u.id)"
        assert binding.zero == '0, "", ""'

    def test_view_has_no_statements(self, emitter, users):
        """Views should have no statements."""
        view = TableUnit("ActiveUser", "active_users", users.fields, kind="view")
        binding = emitter.emit_table(view)
        assert binding.table_kind == "view"
        assert binding.statements == {}

    def test_table_without_key_has_no_statements(self, emitter, make_field):
        """Tables without a key should have no statements."""
        logs = TableUnit("Log", "logs", (make_field("line", "str"),))
        assert emitter.emit_table(logs).statements == {}

    def test_failed_statement_has_no_call(self, emitter, make_field):
        """A statement with an error marker should have no call."""
        keys = TableUnit("Key", "keys", (make_field("id", primary=True),))
        binding = emitter.emit_table(keys)
        assert binding.statements["update"].error == "NO UPDATABLE FIELDS: keys"
        assert "update" not in binding.calls
        assert "delete" in binding.calls

    def test_single_file(self, resolver, users):
        """The single file option should override the destination."""
        binding = make_emitter(resolver, single="db.py").emit_table(users)
        assert binding.dest == "db.py"

    def test_to_dict(self, emitter, users):
        """Bindings should serialise to plain data."""
        data = emitter.emit_table(users).to_dict()
        assert data["kind"] == "table"
        assert data["statements"]["insert"]["text"].endswith("RETURNING id")
        assert data["fields"][0]["name"] == "id"


class TestEmitOthers:
    """Tests for enum, index, foreign key and routine bindings."""

    def test_enum(self, emitter):
        """Enum bindings should carry their values."""
        enum = EnumUnit("UserStatus", "user_status", (EnumValueUnit("active", "active", 1),))
        binding = emitter.emit_enum(enum)
        assert isinstance(binding, EnumBinding)
        assert binding.dest == "userstatus.py"
        assert binding.to_dict()["values"] == [
            {"name": "active", "sql_name": "active", "const_value": 1}
        ]

    def test_index(self, emitter, users):
        """Index bindings should go to the table file with a select statement."""
        index = IndexUnit("users_email_idx", "user_by_email", users, (users.fields[2],), is_unique=True)
        binding = emitter.emit_index(index)
        assert binding.dest == "user.py"
        assert binding.statement.text == "SELECT id, name, email FROM users WHERE email = $1"
        assert binding.call == "cursor.execute(sqlstr, [email])"
        assert binding.params == ["email"]

    def test_foreign_key(self, emitter, users, make_field):
        """Foreign key bindings should go to the owning table file."""
        posts = TableUnit("Post", "posts", (make_field("id", primary=True), make_field("author_id")))
        fk = ForeignKeyUnit("user", "posts_author_fkey", posts, (posts.fields[1],), "User",
                            (users.fields[0],), "user_by_id")
        binding = emitter.emit_foreign_key(fk)
        assert binding.dest == "post.py"
        assert binding.call == "user_by_id(cursor, p.author_id)"

    def test_procs(self, emitter, make_field):
        """Function bindings should go to an sf_ file."""
        proc = ProcUnit("function", "count_posts", "count_posts", "Callable[[int], int]",
                        params=(make_field("author_id"),), returns=(make_field("r0"),))
        [binding] = emitter.emit_procs("count_posts", [proc])
        assert binding.dest == "sf_count_posts.py"
        assert binding.statement.text == "SELECT * FROM count_posts($1)"
        assert binding.call == "cursor.execute(sqlstr, [author_id])"
        assert binding.type_signature == "Callable[[int], int]"

    def test_oracle_procedure_named_call(self, resolver, make_field):
        """Oracle procedures should be called with named binds."""
        emitter = make_emitter(resolver, OracleDialect())
        proc = ProcUnit("procedure", "purge", "PURGE", "Callable[[int], None]",
                        params=(make_field("days", sql_name="DAYS"),), void=True)
        [binding] = emitter.emit_procs("purge", [proc])
        assert binding.dest == "sp_purge.py"
        assert binding.call == 'cursor.execute(sqlstr, {"DAYS": days})'

    def test_procs_unsupported(self, resolver, make_field):
        """Dialects without routines should raise."""
        emitter = make_emitter(resolver, SQLiteDialect())
        proc = ProcUnit("procedure", "purge", "purge", "Callable[[], None]", void=True)
        with pytest.raises(UnsupportedOperationError):
            emitter.emit_procs("purge", [proc])


class TestEmitQuery:
    """Tests for custom query bindings."""

    @pytest.fixture
    def query(self, make_field):
        """A query returning UserCount rows."""
        typ = TableUnit("UserCount", "user_count", (make_field("n"),), kind="query")
        return QueryUnit(
            name="user_counts_by_author_id",
            query=("SELECT COUNT(*) AS n FROM posts WHERE author_id = %s",),
            comments=("",),
            params=(QueryParamUnit("author_id", "int"),),
            type=typ,
        )

    def test_type_and_query(self, emitter, query):
        """A query should emit its result type and itself."""
        typedef, binding = emitter.emit_query(query)
        assert isinstance(typedef, TableBinding)
        assert typedef.statements == {}
        assert isinstance(binding, QueryBinding)
        assert binding.dest == "usercount.py"
        assert binding.call == "cursor.execute(sqlstr, [author_id])"
        assert binding.signature.endswith("-> list[UserCount]")

    def test_exec_has_no_type(self, emitter, query):
        """Exec queries should emit no result type."""
        bindings = emitter.emit_query(replace(query, exec=True, one=True))
        assert [type(b) for b in bindings] == [QueryBinding]

    def test_interpolated_params_not_bound(self, emitter, query):
        """Interpolated parameters should not be bound."""
        params = query.params + (QueryParamUnit("table", "str", interpolate=True),)
        [_, binding] = emitter.emit_query(replace(query, params=params, interpolate=True))
        assert binding.params == ["author_id"]
