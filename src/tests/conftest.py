"""Shared fixtures: a token ABI with functions, events and custom errors."""

import json

import pytest

from revdec.core.interface import InterfaceDescription

TOKEN_ABI = [
    {"type": "function", "name": "transfer", "inputs": [], "outputs": []},
    {"type": "event", "name": "Transfer", "inputs": [], "anonymous": False},
    {
        "type": "error",
        "name": "InsufficientBalance",
        "inputs": [
            {"type": "uint256", "name": "available"},
            {"type": "uint256", "name": "required"},
        ],
    },
    {
        "type": "error",
        "name": "UnauthorizedCaller",
        "inputs": [{"type": "address", "name": "caller"}],
    },
    {"type": "error", "name": "Paused", "inputs": []},
    {
        "type": "error",
        "name": "OrderRejected",
        "inputs": [
            {
                "type": "tuple",
                "name": "order",
                "components": [
                    {"type": "address", "name": "maker"},
                    {"type": "uint256[]", "name": "amounts"},
                    {"type": "string", "name": "memo"},
                ],
            },
            {"type": "bytes", "name": "reason"},
        ],
    },
]


@pytest.fixture
def token_abi():
    """Parsed ABI with functions, events and errors."""
    return [dict(entry) for entry in TOKEN_ABI]


@pytest.fixture
def interface(token_abi):
    """InterfaceDescription built from the token ABI."""
    return InterfaceDescription.from_abi(token_abi, source="Token.json")


@pytest.fixture
def abi_file(tmp_path, token_abi):
    """Foundry-style build artifact holding the token ABI."""
    path = tmp_path / "Token.json"
    path.write_text(json.dumps({"abi": token_abi, "bytecode": {"object": "0x"}}))
    return path
