"""
Pytest fixtures for the test suite.

Data-layer tests use an in-memory SQLite engine shared across connections
(StaticPool), created fresh for each test. Token tests sign real ES256 tokens
with a throwaway key pair.
"""
from __future__ import annotations

import time

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


TEST_DB_URL = "sqlite://"


@pytest.fixture
def engine():
    """Create a fresh in-memory SQLite engine for each test."""
    return create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture
def tables(engine):
    """Create all ORM tables on the test engine."""
    from agency_bridge.db.init_db import init_db

    init_db(engine)
    return engine


@pytest.fixture
def session_factory(tables):
    return sessionmaker(bind=tables, autocommit=False, autoflush=False, class_=Session)


@pytest.fixture
def db_session(session_factory):
    """Session for arranging rows; closed after the test."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="session")
def ec_private_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def ec_public_pem(ec_private_key) -> str:
    return ec_private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


@pytest.fixture
def agent_payload() -> dict:
    now = int(time.time())
    return {
        "sub": "agent-42",
        "agencyNumber": "AG1",
        "companyCode": "AER",
        "jobId": 123,
        "role": "agent",
        "iss": "qa-cockpit",
        "aud": "travel",
        "jti": "token-1",
        "agentFirstName": "Ada",
        "agentLastName": "Lovelace",
        "iat": now - 30,
        "nbf": now - 30,
        "exp": now + 300,
    }


@pytest.fixture
def make_token(ec_private_key):
    """Sign a payload with the test key; header fields can be overridden."""

    def _make(payload: dict, *, kid: str | None = "key-1", key=None, algorithm: str = "ES256") -> str:
        headers = {"kid": kid} if kid is not None else {}
        return jwt.encode(payload, key if key is not None else ec_private_key, algorithm=algorithm, headers=headers)

    return _make
