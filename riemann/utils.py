"""
Utility functions for the Riemann client library
"""
import asyncio
import sys
from dataclasses import dataclass, fields
from typing import Callable, Any

import yaml

from .exceptions import RiemannConfigurationError
from .io.transport import ClientConst


@dataclass
class RiemannConfig:
    """Connection settings, usually loaded from the riemann: section of a YAML file"""
    network: str = "tcp"
    host: str = "localhost"
    port: int = ClientConst.DEFAULT_PORT
    print_traffic: bool = False

    @property
    def address(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def load_config(path: str, section: str = "riemann") -> RiemannConfig:
    """
    Load a RiemannConfig from a YAML file.

    The file is expected to look like:

        riemann:
          network: tcp
          host: riemann.example.com
          port: 5555

    Missing keys take their defaults; a missing section gives an all-default config.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise RiemannConfigurationError(f"{path}: invalid YAML: {e}") from e

    if not isinstance(document, dict):
        raise RiemannConfigurationError(f"{path}: expected a mapping at the top level")
    settings = document.get(section) or {}
    if not isinstance(settings, dict):
        raise RiemannConfigurationError(f"{path}: '{section}' must be a mapping")

    known = {f.name for f in fields(RiemannConfig)}
    unknown = set(settings) - known
    if unknown:
        raise RiemannConfigurationError(f"{path}: unknown {section} settings: {', '.join(sorted(unknown))}")

    config = RiemannConfig(**settings)
    if not isinstance(config.port, int) or isinstance(config.port, bool):
        raise RiemannConfigurationError(f"{path}: port must be an integer, not {config.port!r}")
    return config


def parse_address(address: str, default_host: str = "localhost") -> tuple[str, int]:
    """
    Split "host:port" into its parts.

    IPv6 literals must be bracketed ("[::1]:5555"). An empty host (":5555")
    means default_host.
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        raise RiemannConfigurationError(f"address {address!r}: missing port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise RiemannConfigurationError(f"address {address!r}: too many colons")
    try:
        port_number = int(port)
    except ValueError:
        raise RiemannConfigurationError(f"address {address!r}: invalid port {port!r}") from None
    if not 0 < port_number < 65536:
        raise RiemannConfigurationError(f"address {address!r}: port out of range")
    return host or default_host, port_number


def run_with_keyboard_interrupt(main_func: Callable[[], Any]) -> None:
    """
    Run an async main function with graceful KeyboardInterrupt handling.

    Args:
        main_func: The async main function to run
    """
    try:
        asyncio.run(main_func())
    except KeyboardInterrupt:
        print("\nInterrupted by user (Ctrl+C)")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)
