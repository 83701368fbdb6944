# sql_data_api/core/db_types.py
"""
Mapping between logical column data types and database column types.

Used when a caller needs to describe or create a table on the server side
for a given connection type.
"""
from __future__ import annotations

from enum import Enum

from sql_data_api.core.errors import InvalidArgument


class DbConnectionType(str, Enum):
    SqlServer = "SqlServer"
    SqlServerSchema = "SqlServerSchema"
    PostgreSql = "PostgreSql"
    Oracle = "Oracle"
    MySql = "MySql"
    SybaseAse = "SybaseAse"


class DataTypeName(str, Enum):
    String = "String"
    LargeString = "LargeString"
    WholeNumber = "WholeNumber"
    BigIntNumber = "BigIntNumber"
    FloatNumber = "FloatNumber"
    Boolean = "Boolean"
    Date = "Date"
    DateTime = "DateTime"


class SqlServerType(str, Enum):
    VARCHAR = "varchar"
    NVARCHAR = "nvarchar"
    FLOAT = "float"
    DATE = "date"
    DATETIME2 = "datetime2"
    DATETIME = "datetime"
    INT = "int"
    TEXT = "text"
    CHAR = "char"
    BINARY = "binary"
    VARBINARY = "varbinary"
    BIT = "bit"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    BIGINT = "bigint"
    DECIMAL = "decimal"
    REAL = "real"
    NUMERIC = "numeric"


class SybaseAseType(str, Enum):
    VARCHAR = "varchar"
    NVARCHAR = "nvarchar"
    FLOAT = "float"
    DATE = "date"
    DATETIME = "datetime"
    SMALLDATETIME = "smalldatetime"
    INT = "int"
    TEXT = "text"
    CHAR = "char"
    BINARY = "binary"
    VARBINARY = "varbinary"
    BIT = "bit"
    TINYINT = "tinyint"
    SMALLINT = "smallint"
    BIGINT = "bigint"
    DECIMAL = "decimal"
    REAL = "real"
    NUMERIC = "numeric"
    MONEY = "money"


class PostgreSqlType(str, Enum):
    VARCHAR = "varchar"
    INTEGER = "int"
    DOUBLE = "float8"
    DATE = "date"
    TIMESTAMP = "timestamp"
    BOOLEAN = "bool"
    SMALLINT = "int2"
    BIGINT = "int8"
    REAL = "float4"
    INTEGER4 = "int4"
    NUMERIC = "numeric"
    MONEY = "money"
    TEXT = "text"
    CHAR = "char"
    BPCHAR = "bpchar"
    JSONB = "jsonb"
    XML = "xml"
    JSON = "json"


D = DataTypeName

SQL_SERVER_TO_DATA_TYPE: dict[SqlServerType, DataTypeName] = {
    SqlServerType.TEXT: D.LargeString,
    SqlServerType.CHAR: D.String,
    SqlServerType.VARCHAR: D.String,
    SqlServerType.NVARCHAR: D.String,
    SqlServerType.BINARY: D.LargeString,
    SqlServerType.VARBINARY: D.LargeString,
    SqlServerType.DATE: D.Date,
    SqlServerType.DATETIME: D.DateTime,
    SqlServerType.DATETIME2: D.DateTime,
    SqlServerType.DECIMAL: D.FloatNumber,
    SqlServerType.FLOAT: D.FloatNumber,
    SqlServerType.NUMERIC: D.FloatNumber,
    SqlServerType.REAL: D.FloatNumber,
    SqlServerType.SMALLINT: D.WholeNumber,
    SqlServerType.BIGINT: D.BigIntNumber,
    SqlServerType.INT: D.WholeNumber,
    SqlServerType.TINYINT: D.WholeNumber,
    SqlServerType.BIT: D.Boolean,
}

SYBASE_ASE_TO_DATA_TYPE: dict[SybaseAseType, DataTypeName] = {
    SybaseAseType.TEXT: D.LargeString,
    SybaseAseType.CHAR: D.String,
    SybaseAseType.VARCHAR: D.String,
    SybaseAseType.NVARCHAR: D.String,
    SybaseAseType.BINARY: D.LargeString,
    SybaseAseType.VARBINARY: D.LargeString,
    SybaseAseType.DATE: D.Date,
    SybaseAseType.SMALLDATETIME: D.DateTime,
    SybaseAseType.DATETIME: D.DateTime,
    SybaseAseType.DECIMAL: D.FloatNumber,
    SybaseAseType.FLOAT: D.FloatNumber,
    SybaseAseType.MONEY: D.FloatNumber,
    SybaseAseType.NUMERIC: D.FloatNumber,
    SybaseAseType.REAL: D.FloatNumber,
    SybaseAseType.SMALLINT: D.WholeNumber,
    SybaseAseType.BIGINT: D.BigIntNumber,
    SybaseAseType.INT: D.WholeNumber,
    SybaseAseType.TINYINT: D.WholeNumber,
    SybaseAseType.BIT: D.Boolean,
}

POSTGRESQL_TO_DATA_TYPE: dict[PostgreSqlType, DataTypeName] = {
    PostgreSqlType.BOOLEAN: D.Boolean,
    PostgreSqlType.SMALLINT: D.WholeNumber,
    PostgreSqlType.INTEGER: D.WholeNumber,
    PostgreSqlType.INTEGER4: D.WholeNumber,
    PostgreSqlType.BIGINT: D.BigIntNumber,
    PostgreSqlType.REAL: D.FloatNumber,
    PostgreSqlType.DOUBLE: D.FloatNumber,
    PostgreSqlType.NUMERIC: D.FloatNumber,
    PostgreSqlType.MONEY: D.FloatNumber,
    PostgreSqlType.TEXT: D.LargeString,
    PostgreSqlType.XML: D.LargeString,
    PostgreSqlType.VARCHAR: D.String,
    PostgreSqlType.CHAR: D.String,
    PostgreSqlType.JSON: D.String,
    PostgreSqlType.JSONB: D.String,
    PostgreSqlType.BPCHAR: D.String,
    PostgreSqlType.DATE: D.Date,
    PostgreSqlType.TIMESTAMP: D.DateTime,
}

DATA_TYPE_TO_POSTGRESQL: dict[DataTypeName, PostgreSqlType] = {
    D.WholeNumber: PostgreSqlType.INTEGER,
    D.Date: PostgreSqlType.DATE,
    D.DateTime: PostgreSqlType.TIMESTAMP,
    D.FloatNumber: PostgreSqlType.DOUBLE,
    D.String: PostgreSqlType.VARCHAR,
    D.Boolean: PostgreSqlType.BOOLEAN,
    D.BigIntNumber: PostgreSqlType.BIGINT,
    D.LargeString: PostgreSqlType.TEXT,
}

DATA_TYPE_TO_SQL_SERVER: dict[DataTypeName, SqlServerType] = {
    D.WholeNumber: SqlServerType.INT,
    D.Date: SqlServerType.DATE,
    D.DateTime: SqlServerType.DATETIME2,
    D.FloatNumber: SqlServerType.FLOAT,
    D.String: SqlServerType.VARCHAR,
    D.Boolean: SqlServerType.BIT,
    D.BigIntNumber: SqlServerType.BIGINT,
    D.LargeString: SqlServerType.TEXT,
}

DATA_TYPE_TO_SYBASE_ASE: dict[DataTypeName, SybaseAseType] = {
    D.WholeNumber: SybaseAseType.INT,
    D.Date: SybaseAseType.DATE,
    D.DateTime: SybaseAseType.DATETIME,
    D.FloatNumber: SybaseAseType.FLOAT,
    D.String: SybaseAseType.VARCHAR,
    D.Boolean: SybaseAseType.BIT,
    D.BigIntNumber: SybaseAseType.BIGINT,
    D.LargeString: SybaseAseType.TEXT,
}

_SQL_SERVER = (DbConnectionType.SqlServer, DbConnectionType.SqlServerSchema)


class DbTypeConverter:
    """Converts between ``DataTypeName`` and the column types of a connection."""

    def to_db_type(
        self, data_type: DataTypeName | str, connection_type: DbConnectionType | str
    ) -> SqlServerType | PostgreSqlType | SybaseAseType:
        data_type = DataTypeName(data_type)
        connection_type = DbConnectionType(connection_type)

        if connection_type in _SQL_SERVER:
            return DATA_TYPE_TO_SQL_SERVER[data_type]
        if connection_type is DbConnectionType.PostgreSql:
            return DATA_TYPE_TO_POSTGRESQL[data_type]
        if connection_type is DbConnectionType.SybaseAse:
            return DATA_TYPE_TO_SYBASE_ASE[data_type]
        raise InvalidArgument(f"Not Supported ConnectionType: {connection_type.value}")

    def from_db_type(
        self, db_type: str, connection_type: DbConnectionType | str
    ) -> DataTypeName:
        connection_type = DbConnectionType(connection_type)
        try:
            if connection_type in _SQL_SERVER:
                return SQL_SERVER_TO_DATA_TYPE[SqlServerType(db_type.lower())]
            if connection_type is DbConnectionType.PostgreSql:
                return POSTGRESQL_TO_DATA_TYPE[PostgreSqlType(db_type.lower())]
            if connection_type is DbConnectionType.SybaseAse:
                return SYBASE_ASE_TO_DATA_TYPE[SybaseAseType(db_type.lower())]
        except ValueError as exc:
            raise InvalidArgument(
                f"Unknown {connection_type.value} column type '{db_type}'"
            ) from exc
        raise InvalidArgument(f"Not Supported ConnectionType: {connection_type.value}")
