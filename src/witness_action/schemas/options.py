"""Options controlling a single `witness run` invocation.

Every optional field distinguishes "not given" (None / empty) from a value.
Absent and empty values never produce a flag on the witness command line;
see witness_action.attestation.arguments for the rendering rules.

Example:
    >>> options = WitnessOptions(step="build", outfile="attestation.json")
    >>> options.attestations
    ()
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

SIGSTORE_FULCIO_URL = "https://fulcio.sigstore.dev"
"""Public-good Fulcio instance used when keyless signing is enabled."""

SIGSTORE_OIDC_CLIENT_ID = "sigstore"
"""OIDC client id registered with the public-good Sigstore issuer."""

SIGSTORE_OIDC_ISSUER = "https://oauth2.sigstore.dev/auth"
"""Public-good Sigstore OIDC issuer."""

FREETSA_TIMESTAMP_SERVER = "https://freetsa.org/tsr"
"""Timestamp authority added in front of configured servers for keyless signing."""


class WitnessOptions(BaseModel):
    """Validated options for the attestor CLI.

    Immutable once constructed. Sequence fields are stored as tuples so the
    order given by the caller is preserved and cannot be mutated later.

    Examples:
        >>> options = WitnessOptions(
        ...     step="integration",
        ...     attestations=["command-run", "environment"],
        ...     key="/keys/signing.pem",
        ... )
        >>> options.attestations
        ('command-run', 'environment')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    step: str | None = Field(
        default=None,
        description="Logical step name recorded in the attestation",
    )
    outfile: str | None = Field(
        default=None,
        description="Local path where the signed attestation is written",
    )
    attestations: tuple[str, ...] = Field(
        default=(),
        description="Attestor plugins to enable, in order",
    )
    key: str | None = Field(
        default=None,
        description="Path to a signing key for file-based signing",
    )
    enable_archivista: bool | None = Field(
        default=None,
        description="Upload the attestation to Archivista",
    )
    enable_sigstore: bool | None = Field(
        default=None,
        description="Use Sigstore keyless signing",
    )
    archivista_server: str | None = Field(
        default=None,
        description="Archivista server URL",
    )
    certificate: str | None = Field(
        default=None,
        description="Path to the signer's certificate",
    )
    intermediates: tuple[str, ...] = Field(
        default=(),
        description="Intermediate certificates for the signer",
    )
    fulcio: str | None = Field(
        default=None,
        description="Fulcio server URL",
    )
    fulcio_oidc_client_id: str | None = Field(
        default=None,
        description="OIDC client id used to obtain a Fulcio certificate",
    )
    fulcio_oidc_issuer: str | None = Field(
        default=None,
        description="OIDC issuer used to obtain a Fulcio certificate",
    )
    fulcio_token: str | None = Field(
        default=None,
        description="Raw OIDC token passed to Fulcio",
        repr=False,
    )
    timestamp_servers: tuple[str, ...] = Field(
        default=(),
        description="Timestamp authority URLs, in order",
    )
    spiffe_socket: str | None = Field(
        default=None,
        description="Path to a SPIFFE workload API socket",
    )
    product_include_glob: str | None = Field(
        default=None,
        description="Glob of products to include in the product attestor",
    )
    product_exclude_glob: str | None = Field(
        default=None,
        description="Glob of products to exclude from the product attestor",
    )
    maven_pom: str | None = Field(
        default=None,
        description="Path to the Maven POM used by the maven attestor",
    )
    export_link: bool | None = Field(
        default=None,
        description="Export the link predicate as its own attestation",
    )
    export_sbom: bool | None = Field(
        default=None,
        description="Export the SBOM predicate as its own attestation",
    )
    export_slsa: bool | None = Field(
        default=None,
        description="Export the SLSA provenance predicate as its own attestation",
    )
    trace: bool | None = Field(
        default=None,
        description="Enable witness tracing of the wrapped command",
    )

    @field_validator("attestations", "intermediates", "timestamp_servers", mode="before")
    @classmethod
    def coerce_sequence(cls, v: object) -> object:
        """Accept None for sequence fields and treat it as empty."""
        if v is None:
            return ()
        return v


__all__ = [
    "FREETSA_TIMESTAMP_SERVER",
    "SIGSTORE_FULCIO_URL",
    "SIGSTORE_OIDC_CLIENT_ID",
    "SIGSTORE_OIDC_ISSUER",
    "WitnessOptions",
]
