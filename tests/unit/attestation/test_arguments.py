"""Unit tests for the witness argument assembler.

These tests verify that assemble_witness_args:
- Starts with `run` and emits exactly one `--` separator
- Emits the step flag only for a non-empty step, before the separator
- Preserves attestation order
- Passes the payload through element by element, untouched
"""

from __future__ import annotations

from typing import Any

import pytest

from witness_action.attestation.arguments import (
    SEPARATOR,
    assemble_witness_args,
    parse_command_for_shell,
)
from witness_action.schemas.options import WitnessOptions


def _payload(args: list[str]) -> list[str]:
    return args[args.index(SEPARATOR) + 1 :]


@pytest.fixture
def base_options() -> WitnessOptions:
    """Options used by the command flow tests."""
    return WitnessOptions(
        step="build",
        outfile="attestation.json",
        enable_archivista=False,
        attestations=["git", "github"],
    )


class TestStepFlag:
    """Tests for the -s=<step> flag."""

    def test_includes_step(self) -> None:
        options = WitnessOptions(
            step="build-application",
            outfile="test.att",
            attestations=["command-run"],
            key="/path/to/key.pem",
        )

        args = assemble_witness_args(options, ["echo", "test"])

        assert "-s=build-application" in args

    def test_step_with_special_characters(self) -> None:
        args = assemble_witness_args(WitnessOptions(step="my-build-step-v1.2.3"), [])

        assert "-s=my-build-step-v1.2.3" in args

    @pytest.mark.parametrize(
        "options",
        [
            WitnessOptions(step="", outfile="test.att"),
            WitnessOptions(step=None, outfile="test.att"),
            WitnessOptions(outfile="test.att"),
            {"outfile": "test.att"},
            {"step": None},
        ],
    )
    def test_no_step_flag_when_step_missing(self, options: Any) -> None:
        args = assemble_witness_args(options, [])

        assert [arg for arg in args if arg.startswith("-s=")] == []

    def test_step_not_trimmed(self) -> None:
        args = assemble_witness_args(WitnessOptions(step=" spaced "), [])

        assert "-s= spaced " in args

    def test_step_before_separator(self) -> None:
        options = WitnessOptions(step="test-step", outfile="test.att")

        args = assemble_witness_args(options, ["echo", "hello"])

        assert args.count("-s=test-step") == 1
        assert args.index("-s=test-step") < args.index(SEPARATOR)


class TestFlagOrder:
    """Tests for the fixed flag order."""

    def test_core_flags_in_order(self) -> None:
        options = WitnessOptions(
            step="integration-test-step",
            outfile="integration.att",
            attestations=["command-run", "environment"],
            key="/test/key.pem",
            enable_archivista=False,
            enable_sigstore=False,
        )

        args = assemble_witness_args(options, ["go", "build", "-o", "app"])

        assert args == [
            "run",
            "-s=integration-test-step",
            "-a=command-run",
            "-a=environment",
            "-o=integration.att",
            "--signer-file-key-path=/test/key.pem",
            "--",
            "go",
            "build",
            "-o",
            "app",
        ]

    def test_attestation_order_preserved(self) -> None:
        options = WitnessOptions(attestations=["slsa", "git", "environment", "github"])

        args = assemble_witness_args(options, [])

        assert [arg for arg in args if arg.startswith("-a=")] == [
            "-a=slsa",
            "-a=git",
            "-a=environment",
            "-a=github",
        ]

    def test_passthrough_flags_after_key(self) -> None:
        options = WitnessOptions(
            key="/k.pem",
            enable_archivista=True,
            archivista_server="https://archivista.example.com",
            fulcio="https://fulcio.sigstore.dev",
            fulcio_oidc_client_id="sigstore",
            fulcio_oidc_issuer="https://oauth2.sigstore.dev/auth",
            timestamp_servers=["https://freetsa.org/tsr", "https://tsa.example.com"],
            trace=True,
        )

        args = assemble_witness_args(options, [])

        assert args == [
            "run",
            "--signer-file-key-path=/k.pem",
            "--enable-archivista=true",
            "--archivista-server=https://archivista.example.com",
            "--signer-fulcio-url=https://fulcio.sigstore.dev",
            "--signer-fulcio-oidc-client-id=sigstore",
            "--signer-fulcio-oidc-issuer=https://oauth2.sigstore.dev/auth",
            "--timestamp-servers=https://freetsa.org/tsr",
            "--timestamp-servers=https://tsa.example.com",
            "--trace=true",
            "--",
        ]

    def test_attestor_flags(self) -> None:
        options = WitnessOptions(
            certificate="/certs/signer.pem",
            intermediates=["/certs/a.pem", "/certs/b.pem"],
            spiffe_socket="/run/spire/agent.sock",
            product_include_glob="dist/*",
            product_exclude_glob="*.log",
            maven_pom="pom.xml",
            export_link=True,
            export_sbom=False,
            export_slsa=True,
        )

        args = assemble_witness_args(options, [])

        assert args[1:-1] == [
            "--certificate=/certs/signer.pem",
            "-i=/certs/a.pem",
            "-i=/certs/b.pem",
            "--spiffe-socket=/run/spire/agent.sock",
            "--attestor-product-include-glob=dist/*",
            "--attestor-product-exclude-glob=*.log",
            "--attestor-maven-pom-path=pom.xml",
            "--attestor-link-export=true",
            "--attestor-slsa-export=true",
        ]

    def test_disabled_and_empty_options_emit_nothing(self) -> None:
        options = WitnessOptions(
            step="",
            outfile="",
            key="",
            enable_archivista=False,
            enable_sigstore=True,
            archivista_server="",
            fulcio_token="",
        )

        assert assemble_witness_args(options, ["true"]) == ["run", "--", "true"]


class TestPayloadPassthrough:
    """Tests that the payload reaches the shell verbatim."""

    @pytest.mark.parametrize(
        "command",
        [
            "make build docker_tag=v1.2.3-abc123",
            "make build docker_tag=my-image:v1.0.0-sha.abc123",
            'echo "hello world" && make build TAG="my tag with spaces"',
            "ls -la | grep foo > output.txt 2>&1",
            "echo $HOME && make build TAG=$MY_TAG",
            'echo "Date: $(date)"',
            'echo "He said \\"hello\\""',
            'cd /tmp\necho "line 1"\necho "line 2"',
            "",
            "   ",
        ],
    )
    def test_command_preserved(self, base_options: WitnessOptions, command: str) -> None:
        args = assemble_witness_args(base_options, ["/bin/sh", "-c", command])

        assert _payload(args) == ["/bin/sh", "-c", command]

    def test_none_elements_become_empty_strings(self, base_options: WitnessOptions) -> None:
        args = assemble_witness_args(base_options, ["/bin/sh", None, "-c", None])

        assert _payload(args) == ["/bin/sh", "", "-c", ""]

    def test_payload_that_looks_like_flags(self, base_options: WitnessOptions) -> None:
        args = assemble_witness_args(base_options, ["-c", "-s=other", "-o=x"])

        assert _payload(args) == ["-c", "-s=other", "-o=x"]
        assert args.index("-s=build") < args.index(SEPARATOR)

    def test_empty_payload(self, base_options: WitnessOptions) -> None:
        args = assemble_witness_args(base_options)

        assert args[-1] == SEPARATOR

    def test_full_structure(self, base_options: WitnessOptions) -> None:
        args = assemble_witness_args(
            WitnessOptions(step="build", outfile="attestation.json"),
            ["/bin/sh", "-c", "make build docker_tag=v1.2.3"],
        )

        assert args[0] == "run"
        assert "-s=build" in args
        assert "-o=attestation.json" in args
        assert args.count(SEPARATOR) == 1
        assert _payload(args) == ["/bin/sh", "-c", "make build docker_tag=v1.2.3"]


class TestAssemblerProperties:
    """Separator uniqueness and idempotence over varied inputs."""

    @pytest.mark.parametrize(
        ("options", "payload"),
        [
            (WitnessOptions(), []),
            (WitnessOptions(step="s", attestations=["git"]), ["make"]),
            ({"step": "x", "key": None, "attestations": None}, ["sh", None]),
            ({}, ["/bin/sh", "-c", "a && b"]),
        ],
    )
    def test_single_separator_and_idempotent(self, options: Any, payload: list[str | None]) -> None:
        first = assemble_witness_args(options, payload)
        second = assemble_witness_args(options, payload)

        assert first == second
        assert first.count(SEPARATOR) == 1
        assert len(_payload(first)) == len(payload)

    def test_does_not_mutate_payload(self) -> None:
        payload: list[str | None] = ["/bin/sh", "-c", None]

        assemble_witness_args(WitnessOptions(), payload)

        assert payload == ["/bin/sh", "-c", None]


class TestParseCommandForShell:
    """Tests for single-shell wrapping of user commands."""

    @pytest.mark.parametrize(
        "command",
        [
            'echo "Hello World"',
            'echo "Step 1"\nexit 1',
            'echo "Value: $MY_VAR"',
            "ls | grep test",
            'echo "output" > file.txt',
            "make build && make test",
            '#!/bin/bash\nset -e\nif [ $? -eq 0 ]; then\n  echo "Success"\nfi',
        ],
    )
    def test_wraps_command_verbatim(self, command: str) -> None:
        assert parse_command_for_shell(command) == ["/bin/sh", "-c", command]

    def test_custom_shell(self) -> None:
        assert parse_command_for_shell("echo hi", shell="/bin/bash") == [
            "/bin/bash",
            "-c",
            "echo hi",
        ]
