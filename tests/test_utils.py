import pytest

from riemann import RiemannConfig, RiemannConfigurationError, load_config, parse_address


@pytest.mark.parametrize("address,expected", [
    ("localhost:5555", ("localhost", 5555)),
    ("10.0.0.1:5556", ("10.0.0.1", 5556)),
    ("[::1]:5555", ("::1", 5555)),
    (":5555", ("localhost", 5555)),
])
def test_parse_address(address, expected):
    assert parse_address(address) == expected


@pytest.mark.parametrize("address", ["localhost", "localhost:http", "::1:5555", "host:0", "host:70000"])
def test_parse_address_rejects_malformed_addresses(address):
    with pytest.raises(RiemannConfigurationError):
        parse_address(address)


def test_config_address_brackets_ipv6_hosts():
    assert RiemannConfig(host="riemann.local", port=5555).address == "riemann.local:5555"
    assert RiemannConfig(host="::1", port=5555).address == "[::1]:5555"


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("riemann:\n  network: udp\n  host: riemann.local\n  port: 5556\n")
    config = load_config(str(path))
    assert config == RiemannConfig(network="udp", host="riemann.local", port=5556)
    assert parse_address(config.address) == ("riemann.local", 5556)


def test_load_config_without_section_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("other: {}\n")
    assert load_config(str(path)) == RiemannConfig()


@pytest.mark.parametrize("document", [
    "riemann:\n  hostname: x\n",
    "riemann: [1, 2]\n",
    "- riemann\n",
    "riemann:\n  port: five\n",
    "riemann: {host: [\n",
])
def test_load_config_rejects_bad_documents(tmp_path, document):
    path = tmp_path / "config.yaml"
    path.write_text(document)
    with pytest.raises(RiemannConfigurationError):
        load_config(str(path))
