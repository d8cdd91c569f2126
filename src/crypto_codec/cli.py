"""Command line interface for crypto-codec."""

from __future__ import annotations

import asyncio
import getpass
import json
import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Awaitable, Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from crypto_codec import __version__
from crypto_codec.codec import api
from crypto_codec.codec.files import EncryptedFile, decrypt_file, encrypt_file
from crypto_codec.crypto.asymmetric import KeyPair
from crypto_codec.crypto.streaming import DEFAULT_CHUNK_SIZE
from crypto_codec.errors import DecryptionError, PrimitiveFailure, ValidationError

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_CRYPTO = 2
EXIT_FS = 3
EXIT_FATAL = 4

console = Console()
err_console = Console(stderr=True)


def _package_version() -> str:
    try:
        return version("crypto-codec")
    except PackageNotFoundError:
        return __version__


def _prompt_secret(value: str | None, label: str) -> str:
    if value is not None:
        return value
    return getpass.getpass(f"{label}: ")


def _emit(value: str) -> None:
    console.print(value, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _handle_action(action: Callable[[], Awaitable[Any]]) -> tuple[int, Any]:
    try:
        result = asyncio.run(action())
    except ValidationError as exc:
        err_console.print(f"[red]Invalid input:[/red] {exc}")
        return EXIT_USAGE, None
    except DecryptionError as exc:
        err_console.print(f"[red]Decryption failed:[/red] {exc}")
        return EXIT_CRYPTO, None
    except PrimitiveFailure as exc:
        err_console.print(f"[red]Cryptographic primitive failed:[/red] {exc}")
        return EXIT_FATAL, None
    except FileNotFoundError as exc:
        err_console.print(f"[red]File not found:[/red] {exc}")
        return EXIT_FS, None
    except PermissionError as exc:
        err_console.print(f"[red]Permission denied:[/red] {exc}")
        return EXIT_FS, None
    except OSError as exc:  # noqa: BLE001
        err_console.print(f"[red]Filesystem error:[/red] {exc}")
        return EXIT_FS, None
    except ValueError as exc:
        err_console.print(f"[red]Invalid argument:[/red] {exc}")
        return EXIT_USAGE, None
    return EXIT_SUCCESS, result


chunk_size_option = click.option(
    "--chunk-size",
    type=int,
    default=DEFAULT_CHUNK_SIZE,
    show_default=True,
    help="Bytes fed to the cipher or hash per step.",
)
key_option = click.option("--key", "key_opt", help="64 hex character symmetric key (will prompt if omitted).")


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=False,
)
@click.version_option(version=_package_version(), prog_name="crypto-codec")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Key derivation, chunked encryption and digests from the terminal."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


@cli.command("version", help="Show the crypto-codec version.")
def version_cmd() -> None:
    console.print(f"crypto-codec {_package_version()}")


@cli.command("derive-key", help="Derive a symmetric key from a password and salt.")
@click.option("--password", "password_opt", help="Password (will prompt if omitted).")
@click.option("--salt", required=True, help="Salt text.")
@click.pass_context
def derive_key(ctx: click.Context, password_opt: str | None, salt: str) -> None:
    password = _prompt_secret(password_opt, "Password")
    code, key = _handle_action(lambda: api.derive_key(password, salt))
    if code == EXIT_SUCCESS:
        _emit(key)
    ctx.exit(code)


@cli.command("random-bytes", help="Print LENGTH secure random bytes as hex.")
@click.argument("length", type=int)
@click.pass_context
def random_bytes(ctx: click.Context, length: int) -> None:
    code, value = _handle_action(lambda: api.random_bytes(length))
    if code == EXIT_SUCCESS:
        _emit(value)
    ctx.exit(code)


@cli.command(help="Print the SHA-256 digest of TEXT or of a UTF-8 text file.")
@click.argument("text", required=False)
@click.option("--file", "file_path", type=click.Path(path_type=Path), help="Read text from a file instead.")
@chunk_size_option
@click.pass_context
def digest(ctx: click.Context, text: str | None, file_path: Path | None, chunk_size: int) -> None:
    if (text is None) == (file_path is None):
        err_console.print("[red]Provide either TEXT or --file.[/red]")
        ctx.exit(EXIT_USAGE)
        return

    async def _run() -> str:
        data = file_path.read_text(encoding="utf-8") if file_path is not None else text
        return await api.digest(data or "", chunk_size)

    code, value = _handle_action(_run)
    if code == EXIT_SUCCESS:
        _emit(value)
    ctx.exit(code)


@cli.command(
    help="Encrypt text or a file into an AES-CBC envelope.",
    epilog="Examples:\n  cryptocodec encrypt --text 'hello' --key <hex>\n  cryptocodec encrypt --file photo.png --key <hex>",
)
@click.option("--text", help="Text to encrypt.")
@click.option("--file", "file_path", type=click.Path(path_type=Path), help="Encrypt raw file bytes.")
@key_option
@click.option("--utf8/--no-utf8", "encode_as_utf8", default=True, show_default=True, help="UTF-8 and base64 encode text first.")
@chunk_size_option
@click.pass_context
def encrypt(
    ctx: click.Context,
    text: str | None,
    file_path: Path | None,
    key_opt: str | None,
    encode_as_utf8: bool,
    chunk_size: int,
) -> None:
    if (text is None) == (file_path is None):
        err_console.print("[red]Provide either --text or --file.[/red]")
        ctx.exit(EXIT_USAGE)
        return
    key = _prompt_secret(key_opt, "Key")

    async def _run() -> str:
        if file_path is not None:
            return await api.encrypt_binary(file_path.read_bytes(), key, chunk_size)
        return await api.encrypt_string(text or "", key, encode_as_utf8, chunk_size)

    code, envelope = _handle_action(_run)
    if code == EXIT_SUCCESS:
        _emit(envelope)
    ctx.exit(code)


@cli.command(
    help="Decrypt an AES-CBC envelope to text, or to a file with --binary.",
    epilog="Examples:\n  cryptocodec decrypt 'AES-CBC:...:...' --key <hex>\n  cryptocodec decrypt 'AES-CBC:...:...' --key <hex> --binary photo.png",
)
@click.argument("envelope")
@key_option
@click.option("--binary", "output_path", type=click.Path(path_type=Path), help="Write raw plaintext bytes here.")
@click.option("--utf8/--no-utf8", "decode_as_utf8", default=True, show_default=True, help="Base64 and UTF-8 decode the plaintext.")
@chunk_size_option
@click.pass_context
def decrypt(
    ctx: click.Context,
    envelope: str,
    key_opt: str | None,
    output_path: Path | None,
    decode_as_utf8: bool,
    chunk_size: int,
) -> None:
    key = _prompt_secret(key_opt, "Key")

    async def _run() -> str | None:
        if output_path is not None:
            output_path.write_bytes(await api.decrypt_binary(envelope, key, chunk_size))
            return None
        return await api.decrypt_to_string(envelope, key, decode_as_utf8, chunk_size)

    code, plaintext = _handle_action(_run)
    if code == EXIT_SUCCESS:
        if plaintext is None:
            console.print(f"[green]Decrypted to[/green] {output_path}.")
        else:
            _emit(plaintext)
    ctx.exit(code)


@cli.command(help="Generate an RSA key pair as PEM.")
@click.option("--bits", type=int, default=4096, show_default=True, help="Modulus length in bits.")
@click.option("--public-out", type=click.Path(path_type=Path), help="Write the public key to this file.")
@click.option("--private-out", type=click.Path(path_type=Path), help="Write the private key to this file.")
@click.pass_context
def keygen(ctx: click.Context, bits: int, public_out: Path | None, private_out: Path | None) -> None:
    async def _run() -> KeyPair:
        pair = await api.generate_key_pair(bits)
        if public_out is not None:
            public_out.write_text(pair.public_key + "\n", encoding="ascii")
        if private_out is not None:
            private_out.write_text(pair.private_key + "\n", encoding="ascii")
        return pair

    code, pair = _handle_action(_run)
    if code == EXIT_SUCCESS:
        if public_out is None:
            _emit(pair.public_key)
        if private_out is None:
            _emit(pair.private_key)
    ctx.exit(code)


@cli.command("rsa-encrypt", help="Encrypt short TEXT with a PEM public key.")
@click.argument("text")
@click.option("--public-key", "public_key_path", required=True, type=click.Path(path_type=Path))
@click.pass_context
def rsa_encrypt(ctx: click.Context, text: str, public_key_path: Path) -> None:
    async def _run() -> str:
        return await api.asymmetric_encrypt(text, public_key_path.read_text(encoding="ascii"))

    code, value = _handle_action(_run)
    if code == EXIT_SUCCESS:
        _emit(value)
    ctx.exit(code)


@cli.command("rsa-decrypt", help="Decrypt CIPHERTEXT hex with a PEM private key.")
@click.argument("ciphertext")
@click.option("--private-key", "private_key_path", required=True, type=click.Path(path_type=Path))
@click.pass_context
def rsa_decrypt(ctx: click.Context, ciphertext: str, private_key_path: Path) -> None:
    async def _run() -> str:
        return await api.asymmetric_decrypt(ciphertext, private_key_path.read_text(encoding="ascii"))

    code, value = _handle_action(_run)
    if code == EXIT_SUCCESS:
        _emit(value)
    ctx.exit(code)


@cli.command("encrypt-file", help="Encrypt INPUT_PATH into a JSON file record at OUTPUT_PATH.")
@click.argument("input_path", type=click.Path(path_type=Path))
@click.argument("output_path", type=click.Path(path_type=Path))
@key_option
@click.option("--key-version", default="1", show_default=True, help="Version label of the key.")
@click.option("--mime-type", default=None, help="MIME type stored with the record.")
@click.option("--overwrite/--no-overwrite", default=False, help="Overwrite output if it already exists.")
@chunk_size_option
@click.pass_context
def encrypt_file_cmd(
    ctx: click.Context,
    input_path: Path,
    output_path: Path,
    key_opt: str | None,
    key_version: str,
    mime_type: str | None,
    overwrite: bool,
    chunk_size: int,
) -> None:
    key = _prompt_secret(key_opt, "Key")

    async def _run() -> EncryptedFile:
        if output_path.exists() and not overwrite:
            raise FileExistsError(f"Output already exists: {output_path}")
        record = await encrypt_file(
            input_path.read_bytes(), input_path.name, key, key_version, mime_type, chunk_size
        )
        output_path.write_text(json.dumps(record.to_dict(), ensure_ascii=False), encoding="utf-8")
        return record

    code, record = _handle_action(_run)
    if code == EXIT_SUCCESS:
        table = Table(show_header=False, box=None)
        table.add_row("Name", record.name)
        table.add_row("Algorithm", record.algorithm.value)
        table.add_row("Key version", record.encryption_key_version)
        table.add_row("Digest", record.digest)
        console.print(f"[green]Encrypted to[/green] {output_path}.")
        console.print(table)
    ctx.exit(code)


@cli.command("decrypt-file", help="Decrypt a JSON file record into OUTPUT_PATH and verify its digest.")
@click.argument("record_path", type=click.Path(path_type=Path))
@click.argument("output_path", type=click.Path(path_type=Path))
@key_option
@click.option("--overwrite/--no-overwrite", default=False, help="Overwrite output if it already exists.")
@chunk_size_option
@click.pass_context
def decrypt_file_cmd(
    ctx: click.Context,
    record_path: Path,
    output_path: Path,
    key_opt: str | None,
    overwrite: bool,
    chunk_size: int,
) -> None:
    key = _prompt_secret(key_opt, "Key")

    async def _run() -> None:
        if output_path.exists() and not overwrite:
            raise FileExistsError(f"Output already exists: {output_path}")
        record = EncryptedFile.from_dict(json.loads(record_path.read_text(encoding="utf-8")))
        output_path.write_bytes(await decrypt_file(record, key, chunk_size))

    code, _ = _handle_action(_run)
    if code == EXIT_SUCCESS:
        console.print(f"[green]Decrypted to[/green] {output_path}.")
    ctx.exit(code)


def main(argv: list[str] | None = None) -> int:
    try:
        return cli.main(args=argv, prog_name="cryptocodec", standalone_mode=False)
    except SystemExit as exc:  # noqa: TRY003
        code = exc.code if isinstance(exc.code, int) else EXIT_USAGE
        return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
