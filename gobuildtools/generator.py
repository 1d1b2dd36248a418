"""Render semantic-convention code from a specification checkout and tidy its identifiers."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import posixpath
import re
import shutil
import subprocess
import sys
import tempfile
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from gobuildtools import semver

logger = logging.getLogger(__name__)

STATIC_CAPITALIZATIONS: tuple[str, ...] = (
    "ACL", "AIX", "AKS", "AMD64", "API", "ARM32", "ARM64", "ARN", "ARNs", "ASCII",
    "AWS", "CPP", "CPU", "CSS", "DB", "DC", "DNS", "EC2", "ECS", "EDB", "EKS", "EOF",
    "GCP", "GRPC", "GUID", "HPUX", "HSQLDB", "HTML", "HTTP", "HTTPS", "IA64", "ID",
    "IP", "JDBC", "JSON", "K8S", "LHS", "MSSQL", "OS", "PHP", "PID", "PPC32", "PPC64",
    "QPS", "QUIC", "RAM", "RHS", "RPC", "SDK", "SLA", "SMTP", "SPDY", "SQL", "SSH",
    "TCP", "TLS", "TTL", "UDP", "UID", "UI", "UUID", "URI", "URL", "UTF8", "VM", "XML",
    "XMPP", "XSRF", "XSS", "ZOS", "CronJob", "DaemonSet", "StatefulSet", "ReplicaSet",
    "WebEngine", "MySQL", "PostgreSQL", "MariaDB", "MaxDB", "FirstSQL", "InstantDB",
    "HBase", "MongoDB", "CouchDB", "CosmosDB", "DynamoDB", "HanaDB", "FreeBSD",
    "NetBSD", "OpenBSD", "DragonflyBSD", "InProc", "FaaS", "OTel",
)

# Not capitalization fixes: every occurrence of a key is replaced by its value.
REPLACEMENTS: dict[str, str] = {
    "RedisDatabase": "RedisDB",
    "IPTCP": "TCP",
    "IPUDP": "UDP",
    "Lineno": "LineNumber",
}

IMPORT_PATH_PLACEHOLDER = "[[IMPORTPATH]]"


@dataclass
class Config:
    """Settings for one generator run."""

    input_path: str = ""
    output_path: str = ""
    output_filename: str = ""
    template_filename: str = "template.j2"
    template_parameters: str = ""
    only_type: str = ""
    container_image: str = "otel/semconvgen"
    spec_version: str = ""
    capitalizations_path: str = ""


def _base(path: str) -> str:
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else "."
    return posixpath.basename(stripped)


def _find_repo_root() -> str:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise RuntimeError(f"unable to find repository root: {exc}") from exc
    return result.stdout.strip()


def validate_config(cfg: Config) -> Config:
    """Check ``cfg`` and return a copy with every derived path filled in."""
    if not cfg.input_path:
        raise ValueError("input path must be provided")

    output_filename = cfg.output_filename or f"{_base(cfg.input_path)}.go"

    spec_version = cfg.spec_version or find_latest_spec_version(cfg)

    output_path = cfg.output_path or posixpath.join("semconv", spec_version)
    if not os.path.isabs(output_path):
        output_path = os.path.join(_find_repo_root(), output_path)
    output_path = os.path.normpath(output_path)

    output_filename = os.path.normpath(os.path.join(output_path, output_filename))

    template_filename = cfg.template_filename
    if not os.path.isabs(template_filename):
        template_filename = os.path.normpath(os.path.join(os.getcwd(), template_filename))

    if cfg.capitalizations_path and not os.path.exists(cfg.capitalizations_path):
        raise FileNotFoundError(
            f"capitalizations file does not exist: {cfg.capitalizations_path}"
        )

    return dataclasses.replace(
        cfg,
        output_filename=output_filename,
        spec_version=spec_version,
        output_path=output_path,
        template_filename=template_filename,
    )


def find_latest_spec_version(cfg: Config) -> str:
    """Return the newest semantic-version tag of the specification repository."""
    cmd = ["git", "tag"]
    try:
        result = subprocess.run(
            cmd, cwd=cfg.input_path, capture_output=True, text=True, check=True
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise RuntimeError(f"unable to exec {' '.join(cmd)}: {exc}") from exc

    versions = semver.sort_versions(
        line for line in result.stdout.split("\n") if semver.is_valid(line)
    )
    if not versions:
        raise RuntimeError(
            f"no version tags found in the specification repo at {cfg.input_path}"
        )
    return versions[-1]


@contextmanager
def checkout_spec_to_dir(cfg: Config, to_dir: str) -> Iterator[str]:
    """Check out ``cfg.spec_version`` as a worktree in ``to_dir`` for the duration of the block."""
    add_cmd = ["git", "worktree", "add", to_dir, cfg.spec_version]
    try:
        subprocess.run(add_cmd, cwd=cfg.input_path, capture_output=True, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise RuntimeError(f"unable to exec {' '.join(add_cmd)}: {exc}") from exc
    try:
        yield to_dir
    finally:
        remove_cmd = ["git", "worktree", "remove", "-f", to_dir]
        try:
            subprocess.run(remove_cmd, cwd=cfg.input_path, capture_output=True, check=True)
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.warning(
                "Could not cleanup spec repo worktree, unable to exec %s: %s",
                " ".join(remove_cmd),
                exc,
            )


def render(cfg: Config) -> None:
    """Run the code generator container and copy its output to ``cfg.output_path``."""
    with tempfile.TemporaryDirectory(prefix="otel_semconvgen") as tmp_dir:
        spec_checkout_path = os.path.join(tmp_dir, "input")
        os.mkdir(spec_checkout_path, 0o700)
        os.mkdir(os.path.join(tmp_dir, "output"), 0o700)

        with checkout_spec_to_dir(cfg, spec_checkout_path):
            shutil.copy(cfg.template_filename, tmp_dir)

            output_name = _base(cfg.output_filename)
            args = [
                "run", "--rm",
                "-v", f"{tmp_dir}:/data:Z",
                cfg.container_image,
                "--yaml-root", posixpath.join("/data/input/model/", _base(cfg.input_path)),
            ]
            if cfg.only_type:
                args += ["--only", cfg.only_type]
            args += [
                "code",
                "--template", posixpath.join("/data", _base(cfg.template_filename)),
                "--output", posixpath.join("/data/output", output_name),
            ]
            if cfg.template_parameters:
                args += ["--parameters", cfg.template_parameters]

            try:
                result = subprocess.run(
                    ["docker", *args], stdout=subprocess.PIPE, stderr=subprocess.STDOUT
                )
            except OSError as exc:
                raise RuntimeError(f"unable to render template: {exc}") from exc
            if result.returncode != 0:
                output = (result.stdout or b"").decode(errors="replace")
                raise RuntimeError(
                    f"unable to render template: exit status {result.returncode}\n{output}"
                )

            os.makedirs(cfg.output_path, 0o700, exist_ok=True)
            shutil.copy(os.path.join(tmp_dir, "output", output_name), cfg.output_path)


def capitalizations(capitalizations_path: str = "") -> list[str]:
    """Return the static capitalizations plus non-blank lines from ``capitalizations_path``."""
    result = list(STATIC_CAPITALIZATIONS)
    if capitalizations_path:
        with open(capitalizations_path, encoding="utf-8") as handle:
            result.extend(line.strip() for line in handle if line.strip())
    return result


_WORD_RE = re.compile(r"\w+")


def title_case(text: str) -> str:
    """Upper-case the first letter of each word and lower-case the rest."""
    return _WORD_RE.sub(lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), text)


def fix_identifier_text(
    text: str, capitalization_list: Iterable[str], output_filename: str
) -> str:
    """Apply capitalization fixes, replacements and the import path to generated text."""
    for target in capitalization_list:
        # Only rewrite when followed by a capital, whitespace, digit, boundary or end,
        # so that e.g. "Identifier" does not become "IDentifier".
        pattern = re.compile(re.escape(title_case(target.lower())) + r"([A-Z\s\d]|\b|$)", re.ASCII)
        text = pattern.sub(lambda m, t=target: t + m.group(1), text)

    for current, replacement in REPLACEMENTS.items():
        text = text.replace(current, replacement)

    package_dir = _base(posixpath.dirname(output_filename.replace(os.sep, "/")))
    import_path = f'"go.opentelemetry.io/otel/semconv/{package_dir}"'
    return text.replace(IMPORT_PATH_PLACEHOLDER, import_path)


def fix_identifiers(cfg: Config) -> None:
    """Rewrite ``cfg.output_filename`` in place with corrected identifiers."""
    with open(cfg.output_filename, encoding="utf-8") as handle:
        data = handle.read()
    data = fix_identifier_text(
        data, capitalizations(cfg.capitalizations_path), cfg.output_filename
    )
    with open(cfg.output_filename, "w", encoding="utf-8") as handle:
        handle.write(data)


def format_file(filename: str) -> None:
    """Format ``filename`` with gofmt."""
    try:
        subprocess.run(["gofmt", "-w", "-s", filename], check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise RuntimeError(f"unable to format updated file: {exc}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="semconvgen")
    parser.add_argument("-i", "--input", default="",
                        help="Path to semantic convention definition YAML. Should be a directory in the specification git repository.")
    parser.add_argument("--only", default="",
                        help="Process only semantic conventions of the specified type. {span, resource, event, metric_group, metric, units, scope, attribute_group}")
    parser.add_argument("-s", "--specver", default="",
                        help="Version of semantic convention to generate. Must be an existing version tag in the specification git repository.")
    parser.add_argument("-o", "--output", default="",
                        help="Path to output target. Must be either an absolute path or relative to the repository root.")
    parser.add_argument("-c", "--container", default="otel/semconvgen", help="Container image ID")
    parser.add_argument("-f", "--filename", default="",
                        help="Filename for templated output. If not specified 'basename(inputPath).go' will be used.")
    parser.add_argument("-t", "--template", default="template.j2", help="Template filename")
    parser.add_argument("-p", "--parameters", default="",
                        help="List of key=value pairs separated by comma. These values are fed into the template as-is.")
    parser.add_argument("-z", "--capitalizations-path", default="",
                        help="Path to a file containing additional newline-separated capitalization strings.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    cfg = Config(
        input_path=args.input,
        only_type=args.only,
        spec_version=args.specver,
        output_path=args.output,
        container_image=args.container,
        output_filename=args.filename,
        template_filename=args.template,
        template_parameters=args.parameters,
        capitalizations_path=args.capitalizations_path,
    )
    try:
        cfg = validate_config(cfg)
    except (ValueError, OSError, RuntimeError) as exc:
        print(exc)
        parser.print_usage()
        sys.exit(-1)

    render(cfg)
    fix_identifiers(cfg)
    format_file(cfg.output_filename)
    return 0