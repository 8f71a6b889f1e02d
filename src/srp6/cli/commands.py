import logging
import sys

import click

from srp6.core.alternates import (HexHashedClientEvidenceRoutine, HexHashedServerEvidenceRoutine,
                                  IdentityBoundPasswordKeyRoutine, PBKDF2PasswordKeyRoutine)
from srp6.core.bigint import from_hex, to_hex
from srp6.core.client import SRP6ClientSession
from srp6.core.constants import (DEFAULT_BITSIZE, DEFAULT_HASH_ALGORITHM, DEFAULT_PBKDF2_ITERATIONS,
                                 DEFAULT_SALT_LENGTH, LOG_FORMAT)
from srp6.core.exceptions import SRP6AuthError, SRP6ConfigError
from srp6.core.params import PRECOMPUTED_PRIMES, CryptoParameters
from srp6.core.protocol import compute_k
from srp6.core.routines import DefaultPasswordKeyRoutine
from srp6.core.server import SRP6ServerSession
from srp6.core.verifier import SRP6VerifierGenerator

ROUTINES = ('default', 'identity', 'pbkdf2')


def load_params(bits: int, hash_name: str) -> CryptoParameters:
    """Resolve the crypto parameters or abort with a usage error."""
    try:
        params = CryptoParameters.get_instance(bits, hash_name)
    except SRP6ConfigError as e:
        raise click.UsageError(str(e))
    if params is None:
        sizes = ", ".join(str(size) for size in sorted(PRECOMPUTED_PRIMES))
        raise click.UsageError(f"No pre-computed prime for {bits} bits (available: {sizes})")
    return params


def make_password_key_routine(name: str, hash_name: str, iterations: int):
    if name == 'identity':
        return IdentityBoundPasswordKeyRoutine(hash_name)
    if name == 'pbkdf2':
        return PBKDF2PasswordKeyRoutine(iterations, hash_name)
    return DefaultPasswordKeyRoutine(hash_name)


def parse_salt(value):
    if value is None:
        return None
    salt = from_hex(value)
    if salt is None or len(value) % 2:
        raise click.BadParameter(f"'{value}' is not an even-length hex string", param_hint='--salt')
    return bytes.fromhex(value)


crypto_options = [
    click.option('--bits', default=DEFAULT_BITSIZE, show_default=True, envvar='SRP6_BITS', type=int,
                 help='Bit size of the pre-computed safe prime N.'),
    click.option('--hash', 'hash_name', default=DEFAULT_HASH_ALGORITHM, show_default=True,
                 envvar='SRP6_HASH', help='Hash algorithm H.'),
]


def with_crypto_options(f):
    for option in reversed(crypto_options):
        f = option(f)
    return f


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Log protocol steps to stderr.')
def cli(verbose):
    """SRP-6a demonstration shell

    Prints parameters, provisions verifiers and runs a client/server
    handshake in process. Values are shown as lowercase hex.
    """
    logging.basicConfig(stream=sys.stderr, level=logging.DEBUG if verbose else logging.WARNING,
                        format=LOG_FORMAT, force=True)


@cli.command()
@with_crypto_options
def params(bits, hash_name):
    """Show the crypto parameters N, g, H and the multiplier k."""
    p = load_params(bits, hash_name)
    click.echo(f"N: {to_hex(p.N)}")
    click.echo(f"g: {to_hex(p.g)}")
    click.echo(f"H: {p.H}")
    click.echo(f"k: {to_hex(compute_k(p.hash_routine(), p.N, p.g))}")


@cli.command()
@click.option('--length', default=DEFAULT_SALT_LENGTH, show_default=True, type=click.IntRange(min=1),
              help='Salt length in bytes.')
def salt(length):
    """Generate a random salt."""
    click.echo(SRP6VerifierGenerator.generate_random_salt(length).hex())


@cli.command()
@with_crypto_options
@click.option('--identity', '-i', required=True, help='User identity I.')
@click.option('--salt', 'salt_hex', default=None, help='Salt as hex. Random if omitted.')
@click.option('--routine', type=click.Choice(ROUTINES), default='default', show_default=True,
              help='Password key (x) routine.')
@click.option('--iterations', default=DEFAULT_PBKDF2_ITERATIONS, show_default=True, type=int,
              help='PBKDF2 iteration count.')
def verifier(bits, hash_name, identity, salt_hex, routine, iterations):
    """Provision a password verifier for a user."""
    p = load_params(bits, hash_name)
    try:
        x_routine = make_password_key_routine(routine, p.H, iterations)
    except SRP6ConfigError as e:
        raise click.UsageError(str(e))
    salt_bytes = parse_salt(salt_hex) or SRP6VerifierGenerator.generate_random_salt()

    password = click.prompt('Password', hide_input=True, confirmation_prompt=True)
    v = SRP6VerifierGenerator(p, x_routine).generate_verifier(salt_bytes, identity, password)
    click.echo(f"I: {identity}")
    click.echo(f"s: {salt_bytes.hex()}")
    click.echo(f"v: {to_hex(v)}")


@cli.command()
@with_crypto_options
@click.option('--identity', '-i', required=True, help='User identity I.')
@click.option('--routine', type=click.Choice(ROUTINES), default='default', show_default=True,
              help='Password key (x) routine.')
@click.option('--iterations', default=DEFAULT_PBKDF2_ITERATIONS, show_default=True, type=int,
              help='PBKDF2 iteration count.')
@click.option('--hex-evidence', is_flag=True, help='Hash evidence messages over hex strings.')
@click.option('--wrong-password', is_flag=True, help='Log in with a different password than provisioned.')
def handshake(bits, hash_name, identity, routine, iterations, hex_evidence, wrong_password):
    """Run a complete client/server authentication in process."""
    p = load_params(bits, hash_name)
    try:
        x_routine = make_password_key_routine(routine, p.H, iterations)
    except SRP6ConfigError as e:
        raise click.UsageError(str(e))
    password = click.prompt('Password', hide_input=True)

    evidence = {}
    if hex_evidence:
        evidence = dict(client_evidence_routine=HexHashedClientEvidenceRoutine(),
                        server_evidence_routine=HexHashedServerEvidenceRoutine())

    generator = SRP6VerifierGenerator(p, x_routine)
    s, v = generator.make_registration(identity, password)
    click.echo(f"Provisioned s={s.hex()} v={to_hex(v)}")

    client = SRP6ClientSession(password_key_routine=x_routine, **evidence)
    server = SRP6ServerSession(p, **evidence)

    client.step1(identity, password + "-wrong" if wrong_password else password)
    click.echo(f"Client -> Server: I={identity}")
    B = server.step1(identity, s, v)
    click.echo(f"Server -> Client: s={s.hex()} B={to_hex(B)}")
    try:
        credentials = client.step2(p, s, B)
        click.echo(f"Client -> Server: A={to_hex(credentials.A)} M1={to_hex(credentials.M1)}")
        M2 = server.step2(credentials.A, credentials.M1)
        click.echo(f"Server -> Client: M2={to_hex(M2)}")
        client.step3(M2)
    except SRP6AuthError as e:
        click.echo(f"Authentication failed: {e}")
        sys.exit(1)

    click.echo("Authentication successful.")
    click.echo(f"Session key hash: {client.get_session_key_hash().hex()}")


def main():
    cli()


if __name__ == '__main__':
    main()
