"""
Merkle Accumulator Command Line Interface

Provides commands for computing root digests and inclusion paths over files.
"""

import logging
from typing import List, Optional, Tuple

import click

from merkle_accumulator.core.accumulator import LayeredAccumulator
from merkle_accumulator.core.config import OddNodePolicy, TreeConfig
from merkle_accumulator.core.errors import MerkleError
from merkle_accumulator.core.tree import HashTree

# Configure click
CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

HASH_CHOICES = ["sha256", "sha384", "sha512", "sha3_256", "sha3_512", "blake2b", "blake2s"]


# Helper functions
def read_items(paths: Tuple[str, ...]) -> List[bytes]:
    """Read each file's contents as one leaf item."""
    items = []
    for path in paths:
        with open(path, 'rb') as f:
            items.append(f.read())
    return items


# Command group
@click.group(context_settings=CONTEXT_SETTINGS)
@click.option('--hash', 'hash_algorithm', type=click.Choice(HASH_CHOICES), default='sha256',
              show_default=True, help='Hash function for leaves and internal nodes')
@click.option('--odd-policy', type=click.Choice([p.value for p in OddNodePolicy]),
              default=OddNodePolicy.PROMOTE.value, show_default=True,
              help='How the unpaired node of an odd-sized layer is handled')
@click.option('--domain-separation/--no-domain-separation', default=False,
              help='Prefix leaf and node preimages with 0x00 / 0x01')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx: click.Context, hash_algorithm: str, odd_policy: str, domain_separation: bool, verbose: bool):
    """Merkle Accumulator - hash commitments over files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')
    ctx.obj = TreeConfig(
        hash_algorithm=hash_algorithm,
        odd_node_policy=odd_policy,
        domain_separation=domain_separation,
    )


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--batch-size', '-b', type=click.IntRange(min=1),
              help='Commit through an accumulator every N files')
@click.pass_obj
def root(config: TreeConfig, files: Tuple[str, ...], batch_size: Optional[int]):
    """Print the root digest of FILES, in the order given."""
    items = read_items(files)

    try:
        if batch_size:
            accumulator = LayeredAccumulator(config)
            for start in range(0, len(items), batch_size):
                accumulator.extend(items[start:start + batch_size])
                accumulator.commit()
            digest = accumulator.root
        else:
            digest = HashTree.build_from_leaves(items, config).root_hash
    except MerkleError as e:
        raise click.ClickException(str(e))

    click.echo(digest.hex())


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option('--index', '-i', type=int, required=True, help='Index of the leaf to prove')
@click.pass_obj
def proof(config: TreeConfig, files: Tuple[str, ...], index: int):
    """Print the inclusion path of one of FILES."""
    tree = HashTree.build_from_leaves(read_items(files), config)

    try:
        merkle_proof = tree.proof(index)
    except IndexError as e:
        raise click.ClickException(str(e))

    click.echo(f"leaf: {merkle_proof.leaf_hash.hex()}")
    click.echo(f"root: {merkle_proof.root_hash.hex()}")
    for step in merkle_proof.hex_path():
        click.echo(step)


# Main entry point
if __name__ == '__main__':
    cli()
