"""Action inputs and their mapping onto WitnessOptions.

GitHub Actions exposes each declared input ``name`` to the action process as
the environment variable ``INPUT_<NAME>`` (upper-cased, spaces replaced by
underscores). This module reads those variables without inventing defaults:

    - variable absent      -> None  (input not given)
    - variable empty       -> ""    (input given as empty)
    - otherwise            -> value with surrounding whitespace trimmed

Keeping "not given" distinct from any default is what lets an explicit
``witness_version`` be told apart from "use the latest release".

Example:
    >>> inputs = ActionInputs({"INPUT_STEP": "build", "INPUT_ATTESTATIONS": "git github"})
    >>> build_witness_options(inputs).attestations
    ('git', 'github')
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import structlog

from witness_action.errors import InputError
from witness_action.schemas.options import (
    FREETSA_TIMESTAMP_SERVER,
    SIGSTORE_FULCIO_URL,
    SIGSTORE_OIDC_CLIENT_ID,
    SIGSTORE_OIDC_ISSUER,
    WitnessOptions,
)

logger = structlog.get_logger(__name__)

# YAML 1.2 core schema booleans, as accepted by @actions/core getBooleanInput.
_TRUE_VALUES = frozenset({"true", "True", "TRUE"})
_FALSE_VALUES = frozenset({"false", "False", "FALSE"})


def input_env_name(name: str) -> str:
    """Return the environment variable carrying an action input.

    Examples:
        >>> input_env_name("enable-archivista")
        'INPUT_ENABLE-ARCHIVISTA'
        >>> input_env_name("witness version")
        'INPUT_WITNESS_VERSION'
    """
    return f"INPUT_{name.replace(' ', '_').upper()}"


class ActionInputs:
    """Read-only view of action inputs.

    Args:
        environ: Mapping to read from. Defaults to os.environ.
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def get(self, name: str) -> str | None:
        """Return an input value, or None when the input was not given."""
        value = self._environ.get(input_env_name(name))
        if value is None:
            return None
        return value.strip()

    def get_raw(self, name: str) -> str | None:
        """Return an input value without trimming.

        Used for the command input, whose leading and trailing whitespace
        belongs to the user's script.
        """
        return self._environ.get(input_env_name(name))

    def get_bool(self, name: str) -> bool | None:
        """Return a boolean input, None when not given or empty.

        Raises:
            InputError: If the value is not a YAML 1.2 core boolean.
        """
        value = self.get(name)
        if not value:
            return None
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise InputError(name, value, "expected one of true/True/TRUE/false/False/FALSE")

    def get_list(self, name: str) -> tuple[str, ...]:
        """Return a whitespace-separated input as a tuple, empty when not given."""
        value = self.get(name)
        if not value:
            return ()
        return tuple(value.split())


def build_witness_options(inputs: ActionInputs) -> WitnessOptions:
    """Build WitnessOptions from action inputs.

    When ``enable-sigstore`` is true, Fulcio settings that were not given
    point at the public-good Sigstore instance and the FreeTSA timestamp
    authority is placed ahead of any configured timestamp servers.

    Args:
        inputs: Action inputs.

    Returns:
        Immutable WitnessOptions.

    Raises:
        InputError: If a boolean input cannot be parsed.
    """
    enable_sigstore = inputs.get_bool("enable-sigstore")
    fulcio = inputs.get("fulcio")
    fulcio_oidc_client_id = inputs.get("fulcio-oidc-client-id")
    fulcio_oidc_issuer = inputs.get("fulcio-oidc-issuer")
    timestamp_servers = inputs.get_list("timestamp-servers")

    if enable_sigstore:
        fulcio = fulcio or SIGSTORE_FULCIO_URL
        fulcio_oidc_client_id = fulcio_oidc_client_id or SIGSTORE_OIDC_CLIENT_ID
        fulcio_oidc_issuer = fulcio_oidc_issuer or SIGSTORE_OIDC_ISSUER
        timestamp_servers = (FREETSA_TIMESTAMP_SERVER,) + tuple(
            server for server in timestamp_servers if server != FREETSA_TIMESTAMP_SERVER
        )
        logger.debug("sigstore_defaults_applied", fulcio=fulcio, issuer=fulcio_oidc_issuer)

    return WitnessOptions(
        step=inputs.get("step"),
        outfile=inputs.get("outfile"),
        attestations=inputs.get_list("attestations"),
        key=inputs.get("key"),
        enable_archivista=inputs.get_bool("enable-archivista"),
        enable_sigstore=enable_sigstore,
        archivista_server=inputs.get("archivista-server"),
        certificate=inputs.get("certificate"),
        intermediates=inputs.get_list("intermediates"),
        fulcio=fulcio,
        fulcio_oidc_client_id=fulcio_oidc_client_id,
        fulcio_oidc_issuer=fulcio_oidc_issuer,
        fulcio_token=inputs.get("fulcio-token"),
        timestamp_servers=timestamp_servers,
        spiffe_socket=inputs.get("spiffe-socket"),
        product_include_glob=inputs.get("product-include-glob"),
        product_exclude_glob=inputs.get("product-exclude-glob"),
        maven_pom=inputs.get("attestor-maven-pom-path"),
        export_link=inputs.get_bool("attestor-link-export"),
        export_sbom=inputs.get_bool("attestor-sbom-export"),
        export_slsa=inputs.get_bool("attestor-slsa-export"),
        trace=inputs.get_bool("trace"),
    )


def requested_version(inputs: ActionInputs) -> str | None:
    """Return the explicitly requested witness version, None when not given."""
    return inputs.get("witness_version") or None


__all__ = [
    "ActionInputs",
    "build_witness_options",
    "input_env_name",
    "requested_version",
]
