"""
Unit tests for SqlServerConnectionString.
"""
import pytest
from connstring.builders.sqlserver import SqlServerConnectionString, DEFAULT_PORT
from connstring.common.exceptions import ValidationError


class TestSqlServerRender:
    def test_empty(self, sqlserver):
        assert sqlserver.render() == ""
        assert str(sqlserver) == ""

    def test_all_together(self):
        conn = SqlServerConnectionString() \
            .set_username_and_password("user", "password") \
            .set_host_with_default_port("sql.test.com") \
            .set_database_name("db_name") \
            .set_connect_timeout(30) \
            .enable_encryption_and_trust_server_certificate()

        assert str(conn) == (
            "Server=sql.test.com,1433;Database=db_name;User Id=user;Password=password;"
            "Connect Timeout=30;Encrypt=yes;TrustServerCertificate=yes;"
        )

    def test_every_token_terminated(self, sqlserver):
        sqlserver.set_database_name("db")
        assert sqlserver.render() == "Database=db;"

    def test_render_is_repeatable(self, sqlserver):
        sqlserver.set_host_with_port("host", 1500).enable_encryption()
        assert sqlserver.render() == sqlserver.render()

    def test_setters_return_same_builder(self, sqlserver):
        assert sqlserver.enable_encryption() is sqlserver
        assert sqlserver.set_command_timeout(5) is sqlserver

    def test_explicit_port(self, sqlserver):
        sqlserver.set_host_with_port("localhost", 1500)
        assert sqlserver.render() == "Server=localhost,1500;"

    def test_default_port_constant(self):
        assert DEFAULT_PORT == 1433

    def test_enable_encryption_only(self, sqlserver):
        sqlserver.enable_encryption()
        assert sqlserver.render() == "Encrypt=yes;"

    def test_values_are_not_escaped(self, sqlserver):
        sqlserver.set_username_and_password(" user", "pa;ss")
        assert sqlserver.render() == "User Id= user;Password=pa;ss;"

    def test_full_field_order(self):
        conn = SqlServerConnectionString() \
            .dangerously_set_parameter("Application Name", "reports") \
            .enable_encryption_and_trust_server_certificate() \
            .set_connect_retry_interval(10) \
            .set_connect_retry_count(3) \
            .set_command_timeout(60) \
            .set_connect_timeout(15) \
            .set_username_and_password("u", "p") \
            .set_database_name("d") \
            .set_host_with_port("h", 1)

        assert conn.render() == (
            "Server=h,1;Database=d;User Id=u;Password=p;Connect Timeout=15;Command Timeout=60;"
            "ConnectRetryCount=3;ConnectRetryInterval=10;Encrypt=yes;TrustServerCertificate=yes;"
            "Application Name=reports;"
        )


class TestSqlServerLastWriteWins:
    def test_host_with_port_then_default_port(self, sqlserver):
        sqlserver.set_host_with_port("first", 1500).set_host_with_default_port("second")
        assert sqlserver.render() == "Server=second,1433;"

    def test_default_port_then_explicit_port(self, sqlserver):
        sqlserver.set_host_with_default_port("first").set_host_with_port("second", 2000)
        assert sqlserver.render() == "Server=second,2000;"

    def test_username_without_password_drops_password(self, sqlserver):
        sqlserver.set_username_and_password("User1", "Pwd")
        sqlserver.set_username_without_password("User2")
        assert sqlserver.render() == "User Id=User2;"

    def test_extra_parameter_replaced(self, sqlserver):
        sqlserver.dangerously_set_parameter("Key", "Value").dangerously_set_parameter("Key", "Other")
        assert sqlserver.render() == "Key=Other;"


class TestSqlServerRetry:
    @pytest.mark.parametrize("given,expected", [(0, 1), (1, 1), (30, 30), (60, 60), (61, 60), (-5, 1)])
    def test_retry_interval_clipped(self, sqlserver, given, expected):
        sqlserver.set_connect_retry_interval(given)
        assert sqlserver.render() == f"ConnectRetryInterval={expected};"

    def test_retry_count_bounds(self, sqlserver):
        sqlserver.set_connect_retry_count(0)
        assert sqlserver.render() == "ConnectRetryCount=0;"
        sqlserver.set_connect_retry_count(255)
        assert sqlserver.render() == "ConnectRetryCount=255;"

    def test_retry_count_too_large(self, sqlserver):
        with pytest.raises(ValidationError):
            sqlserver.set_connect_retry_count(256)
        assert sqlserver.render() == ""


class TestSqlServerValidation:
    def test_negative_connect_timeout(self, sqlserver):
        sqlserver.set_connect_timeout(30)
        with pytest.raises(ValidationError):
            sqlserver.set_connect_timeout(-2)
        assert sqlserver.render() == "Connect Timeout=30;"

    def test_negative_command_timeout(self, sqlserver):
        with pytest.raises(ValidationError):
            sqlserver.set_command_timeout(-1)

    def test_port_out_of_range(self, sqlserver):
        with pytest.raises(ValidationError) as exc:
            sqlserver.set_host_with_port("host", 65536)
        assert exc.value.details["errors"][0]["loc"] == ("port",)

    def test_host_must_be_text(self, sqlserver):
        with pytest.raises(ValidationError):
            sqlserver.set_host_with_default_port(1234)

    def test_repr_masks_password(self, sqlserver):
        sqlserver.set_username_and_password("sa", "hunter2")
        assert "hunter2" not in repr(sqlserver)
