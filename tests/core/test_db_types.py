# tests/core/test_db_types.py
from __future__ import annotations

import pytest

from sql_data_api.core.db_types import (
    DataTypeName,
    DbConnectionType,
    DbTypeConverter,
    PostgreSqlType,
    SqlServerType,
    SybaseAseType,
)
from sql_data_api.core.errors import InvalidArgument


@pytest.fixture
def converter():
    return DbTypeConverter()


class TestToDbType:
    def test_sql_server(self, converter):
        assert converter.to_db_type(DataTypeName.DateTime, "SqlServer") is SqlServerType.DATETIME2
        assert converter.to_db_type("Boolean", DbConnectionType.SqlServerSchema) is SqlServerType.BIT

    def test_postgresql(self, converter):
        assert converter.to_db_type(DataTypeName.FloatNumber, "PostgreSql") is PostgreSqlType.DOUBLE
        assert converter.to_db_type(DataTypeName.LargeString, "PostgreSql") is PostgreSqlType.TEXT

    def test_sybase(self, converter):
        assert converter.to_db_type(DataTypeName.DateTime, "SybaseAse") is SybaseAseType.DATETIME

    def test_unsupported_connection(self, converter):
        with pytest.raises(InvalidArgument, match="Not Supported ConnectionType"):
            converter.to_db_type(DataTypeName.String, "Oracle")


class TestFromDbType:
    def test_sql_server(self, converter):
        assert converter.from_db_type("nvarchar", "SqlServer") is DataTypeName.String
        assert converter.from_db_type("BIGINT", "SqlServer") is DataTypeName.BigIntNumber

    def test_postgresql(self, converter):
        assert converter.from_db_type("jsonb", "PostgreSql") is DataTypeName.String
        assert converter.from_db_type("int4", "PostgreSql") is DataTypeName.WholeNumber

    def test_sybase_money(self, converter):
        assert converter.from_db_type("money", "SybaseAse") is DataTypeName.FloatNumber

    def test_unknown_column_type(self, converter):
        with pytest.raises(InvalidArgument, match="geography"):
            converter.from_db_type("geography", "SqlServer")

    def test_unsupported_connection(self, converter):
        with pytest.raises(InvalidArgument):
            converter.from_db_type("varchar", "MySql")

    @pytest.mark.parametrize("connection", ["SqlServer", "PostgreSql", "SybaseAse"])
    def test_round_trip(self, converter, connection):
        for data_type in DataTypeName:
            db_type = converter.to_db_type(data_type, connection)
            assert converter.from_db_type(db_type.value, connection) is data_type
