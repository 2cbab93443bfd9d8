"""
Schema document loader.

Reads a YAML (or JSON) description of a schema, validates it with Pydantic
models and converts it into the frozen schema model from ``schema.core``.
The document layout mirrors the model:

    schemas:
      - name: public
        tables:
          - name: users
            columns:
              - {name: id, type: integer, primary: true, sequence: true}
              - {name: email, type: "varchar(255)", nullable: true}
            indexes:
              - {name: users_email_idx, fields: [email], unique: true}
        enums:
          - {name: status, values: [active, inactive]}
    queries:
      - {type: UserCount, query: "SELECT COUNT(*) AS n FROM users", one: true}
"""

import json
from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from schemabind.errors import SchemaModelError
from schemabind.schema import core
from schemabind.utils.logging import get_logger

logger = get_logger(__name__)


class TypedDoc(BaseModel):
    """Shared native-type fields of columns, params and query fields."""

    name: str
    type: str = Field(..., description="Native SQL type text")
    nullable: bool = False
    precision: int = 0
    scale: int = 0
    array: bool = False
    enum: Optional[str] = None

    def native(self) -> core.NativeType:
        return core.NativeType(
            name=self.type,
            nullable=self.nullable,
            precision=self.precision,
            scale=self.scale,
            is_array=self.array,
            enum=self.enum,
        )


class ColumnDoc(TypedDoc):
    primary: bool = False
    sequence: bool = False
    comment: str = ""


class IndexDoc(BaseModel):
    name: str
    fields: List[str] = Field(default_factory=list)
    func: str = ""
    unique: bool = False
    primary: bool = False


class ForeignKeyDoc(BaseModel):
    name: str
    fields: List[str] = Field(..., min_length=1)
    ref_table: str
    ref_fields: List[str] = Field(..., min_length=1)
    func: str = ""
    ref_func: str = ""


class TableDoc(BaseModel):
    name: str
    columns: List[ColumnDoc] = Field(default_factory=list)
    manual: bool = False
    indexes: List[IndexDoc] = Field(default_factory=list)
    foreign_keys: List[ForeignKeyDoc] = Field(default_factory=list)
    comment: str = ""


class EnumValueDoc(BaseModel):
    name: str
    value: int


class EnumDoc(BaseModel):
    name: str
    values: List[Union[str, EnumValueDoc]] = Field(..., min_length=1)
    comment: str = ""


class ProcDoc(BaseModel):
    name: str
    kind: core.ProcKind = core.ProcKind.PROCEDURE
    params: List[TypedDoc] = Field(default_factory=list)
    returns: List[TypedDoc] = Field(default_factory=list)
    void: bool = False
    comment: str = ""


class SchemaDoc(BaseModel):
    name: str = ""
    tables: List[TableDoc] = Field(default_factory=list)
    views: List[TableDoc] = Field(default_factory=list)
    enums: List[EnumDoc] = Field(default_factory=list)
    procs: List[ProcDoc] = Field(default_factory=list)


class QueryParamDoc(BaseModel):
    name: str
    type: str
    interpolate: bool = False
    join: bool = False


class QueryDoc(BaseModel):
    type: str
    query: List[str]
    name: str = ""
    comments: List[str] = Field(default_factory=list)
    params: List[QueryParamDoc] = Field(default_factory=list)
    fields: List[TypedDoc] = Field(default_factory=list)
    one: bool = False
    flat: bool = False
    exec: bool = False
    interpolate: bool = False
    manual_fields: bool = False
    comment: str = ""
    type_comment: str = ""

    @field_validator("query", mode="before")
    @classmethod
    def _split_query(cls, value: object) -> object:
        if isinstance(value, str):
            return value.splitlines() or [value]
        return value


class SchemaDocument(BaseModel):
    """Top level of a schema document."""

    schemas: List[SchemaDoc] = Field(default_factory=list)
    queries: List[QueryDoc] = Field(default_factory=list)


def _table(doc: TableDoc, kind: core.TableKind) -> core.Table:
    return core.Table(
        name=doc.name,
        columns=tuple(
            core.Column(
                name=c.name,
                type=c.native(),
                is_primary=c.primary,
                is_sequence=c.sequence,
                comment=c.comment,
            )
            for c in doc.columns
        ),
        kind=kind,
        manual=doc.manual,
        indexes=tuple(
            core.Index(
                name=i.name,
                fields=tuple(i.fields),
                func=i.func,
                is_unique=i.unique,
                is_primary=i.primary,
            )
            for i in doc.indexes
        ),
        foreign_keys=tuple(
            core.ForeignKey(
                name=fk.name,
                fields=tuple(fk.fields),
                ref_table=fk.ref_table,
                ref_fields=tuple(fk.ref_fields),
                func=fk.func,
                ref_func=fk.ref_func,
            )
            for fk in doc.foreign_keys
        ),
        comment=doc.comment,
    )


def _enum(doc: EnumDoc) -> core.Enum:
    values = []
    for ordinal, value in enumerate(doc.values, start=1):
        if isinstance(value, str):
            values.append(core.EnumValue(name=value, const_value=ordinal))
        else:
            values.append(core.EnumValue(name=value.name, const_value=value.value))
    return core.Enum(name=doc.name, values=tuple(values), comment=doc.comment)


def _proc(doc: ProcDoc) -> core.Proc:
    return core.Proc(
        name=doc.name,
        kind=doc.kind,
        params=tuple(core.ProcParam(p.name, p.native()) for p in doc.params),
        returns=tuple(core.ProcParam(r.name, r.native()) for r in doc.returns),
        void=doc.void or not doc.returns,
        comment=doc.comment,
    )


def _query(doc: QueryDoc) -> core.Query:
    return core.Query(
        type=doc.type,
        query=tuple(doc.query),
        name=doc.name,
        comments=tuple(doc.comments),
        params=tuple(
            core.QueryParam(p.name, p.type, p.interpolate, p.join) for p in doc.params
        ),
        fields=tuple(core.QueryField(f.name, f.native()) for f in doc.fields),
        one=doc.one,
        flat=doc.flat,
        exec=doc.exec,
        interpolate=doc.interpolate,
        manual_fields=doc.manual_fields,
        comment=doc.comment,
        type_comment=doc.type_comment,
    )


def build_schema_set(data: dict) -> core.SchemaSet:
    """Validate a raw document and convert it to a SchemaSet.

    Raises:
        SchemaModelError: If the document fails validation or describes an
            inconsistent model.
    """
    try:
        document = SchemaDocument(**(data or {}))
    except ValidationError as e:
        raise SchemaModelError(f"schema document validation failed: {e}")

    schemas = tuple(
        core.Schema(
            name=s.name,
            tables=tuple(_table(t, core.TableKind.TABLE) for t in s.tables),
            views=tuple(_table(v, core.TableKind.VIEW) for v in s.views),
            enums=tuple(_enum(e) for e in s.enums),
            procs=tuple(_proc(p) for p in s.procs),
        )
        for s in document.schemas
    )
    return core.SchemaSet(
        schemas=schemas, queries=tuple(_query(q) for q in document.queries)
    )


def load_schema_file(path: Union[str, Path]) -> core.SchemaSet:
    """
    Load a schema document from a YAML or JSON file.

    Args:
        path: Path to a ``.yml``/``.yaml`` or ``.json`` file

    Returns:
        The validated SchemaSet

    Raises:
        SchemaModelError: If the file is missing, unparsable or invalid
    """
    schema_file = Path(path)
    if not schema_file.exists():
        raise SchemaModelError(f"Schema file not found: {schema_file}")

    try:
        with open(schema_file, "r", encoding="utf-8") as f:
            if schema_file.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        logger.error("schema.parse_error", path=str(schema_file), error=str(e))
        raise SchemaModelError(f"Invalid schema document {schema_file}: {e}")

    schema_set = build_schema_set(data)
    logger.info(
        "schema.loaded",
        path=str(schema_file),
        schemas=len(schema_set.schemas),
        queries=len(schema_set.queries),
    )
    return schema_set


__all__ = ["SchemaDocument", "build_schema_set", "load_schema_file"]
