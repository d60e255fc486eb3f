import click
import logging
from typing import List, Optional

from keccak_const.config import Config
from keccak_const.hashes import VARIANTS, UnsupportedAlgorithm, lookup, new
from keccak_const.log import configure_logging

logger = logging.getLogger(__name__)

# (algorithm, message, output length or None, expected hex)
KNOWN_ANSWERS = [
    ("shake_256", b"Rescue-XLIX", 10, "c021fb03de7b06008448"),
    ("keccak_256", b"", None,
     "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"),
    ("keccak_256", b"transfer(address,uint256)", None,
     "a9059cbb2ab09eb219583f4a59a5d0623ade346d962bcd4e46b11da047c9049b"),
    ("sha3_256", b"The quick brown fox jumps over the lazy dog", None,
     "69070dda01975c8c120c3aada1b282394e7f032fa9cf32f4cb2259a0897dfc04"),
    ("keccak_224", b"", None,
     "f71837502ba8e10837bdd8d365adb85591895602fc552b48b7390abd"),
    ("keccak_384", b"", None,
     "2c23146a63a29acf99e73b88f8c24eaa7dc60aa771780ccc006afbfa8fe2479b"
     "2dd2b21362337441ac12b515911957ff"),
    ("keccak_512", b"", None,
     "0eab42de4c3ceb9235fc91acffe746b29c29a8c366b7c60e4e67c466f36a4304"
     "c00fa9caf9d87976ba469bcbe06713b435f091ef2769fb160cdab33d3670680e"),
]


def run_self_test() -> List[str]:
    """Check every known answer; returns a description of each mismatch."""
    failures = []
    for algorithm, message, length, expected in KNOWN_ANSWERS:
        actual = new(algorithm, message).hexdigest(length)
        if actual != expected:
            failures.append(f"{algorithm}({message!r}): expected {expected}, got {actual}")
    return failures


@click.group()
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']), help='Set logging level')
def cli(log_level: Optional[str]):
    """Keccak, SHA-3 and SHAKE digests from the command line."""
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise click.ClickException(str(e))
    logger.debug("keccak-const CLI initialized")


@cli.command()
@click.argument('texts', nargs=-1, required=True)
@click.option('-a', '--algorithm', default=None, help='Variant name, e.g. sha3_256, keccak256, shake_128')
@click.option('-l', '--length', type=click.IntRange(min=0), default=None, help='Output bytes for SHAKE variants')
@click.option('--hex-input', is_flag=True, help='Treat each argument as hex-encoded bytes')
def digest(texts: List[str], algorithm: Optional[str], length: Optional[int], hex_input: bool):
    """
    Print the hex digest of each argument.

    Examples:
        keccak-const digest -a keccak256 'transfer(address,uint256)'
        keccak-const digest -a shake_256 -l 64 --hex-input 00ff
    """
    try:
        config = Config()
    except ValueError as e:
        raise click.ClickException(str(e))
    algorithm = algorithm or config.get("cli.default_algorithm", "sha3_256")
    try:
        variant = lookup(algorithm)
    except UnsupportedAlgorithm as e:
        raise click.BadParameter(str(e), param_hint="'--algorithm'")
    if variant.digest_size is None and length is None:
        length = config.get("cli.xof_length", 32)

    for text in texts:
        if hex_input:
            try:
                data = bytes.fromhex(text)
            except ValueError:
                raise click.BadParameter(f"not a hex string: {text!r}", param_hint="TEXTS")
        else:
            data = text.encode("utf-8")
        logger.info(f"Hashing {len(data)} bytes with {variant.name}")
        try:
            click.echo(new(variant.name, data).hexdigest(length))
        except ValueError as e:
            logger.error(f"Digest failed: {e}")
            raise click.ClickException(str(e))


@cli.command()
def algorithms():
    """
    List the supported variants.

    Examples:
        keccak-const algorithms
    """
    for v in VARIANTS.values():
        output = f"{v.digest_size * 8}-bit" if v.digest_size else "XOF"
        click.echo(f"{v.name:<11} rate={v.rate:<5} capacity={v.capacity:<5} "
                   f"delimiter=0x{v.delimiter:02x} output={output}")


@cli.command('self-test')
def self_test():
    """Run the built-in known-answer vectors."""
    failures = run_self_test()
    for failure in failures:
        click.echo(f"FAIL: {failure}", err=True)
    total = len(KNOWN_ANSWERS)
    if failures:
        logger.error(f"Self-test: {len(failures)} of {total} vectors failed")
        raise click.ClickException(f"Self-test: {total - len(failures)}/{total} passed")
    click.echo(f"Self-test: {total}/{total} passed")


if __name__ == "__main__":
    cli()
