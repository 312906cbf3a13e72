"""Command-line interface for gql-resolvergen."""

import click
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

from .core.config import load_config, merge_config
from .core.errors import ConfigError, TranslationError
from .core.generator import ResolverTypeGenerator
from .core.hooks import AddHeaderHook, FilterTypesHook, HookRunner
from .core.parser import SchemaParser
from .logger import configure_logging


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir, filter="data")
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


@click.group()
@click.version_option(package_name="gql-resolvergen")
def main():
    """GraphQL resolver type generator.

    Generate TypeScript resolver declarations from GraphQL schemas,
    including Apollo Federation entities.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output file for the generated declarations, or - for stdout.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with translation options.",
)
@click.option(
    "--internal-enums/--no-internal-enums",
    default=None,
    help="Render enums as opaque internal values (overrides the config file).",
)
@click.option(
    "--header",
    help="Text to prepend to the generated file.",
)
@click.option(
    "--exclude-prefix",
    help="Skip schema types whose name starts with this prefix.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str,
    config_path: str | None,
    internal_enums: bool | None,
    header: str | None,
    exclude_prefix: str | None,
    template_dir: str | None,
    verbose: bool,
):
    """Generate TypeScript resolver types from a GraphQL schema.

    Examples:

        gql-resolvergen generate --schema ./schema --output ./src/resolvers.ts

        gql-resolvergen generate -s ./schema.graphql -o - --internal-enums

        gql-resolvergen generate -s ./schema.tgz -o ./resolvers.ts -c codegen.json
    """
    configure_logging(verbose)
    schema_path = Path(schema).resolve()
    to_stdout = output == "-"
    temp_dir = None

    def echo(message: str):
        click.echo(message, err=to_stdout)

    try:
        layers = []
        if config_path:
            layers.append(load_config(config_path))
        if internal_enums is not None:
            layers.append({"internal_enum_value_support": internal_enums})
        config = merge_config(*layers)

        # Handle archives
        actual_schema_path = schema_path
        if schema_path.is_file() and schema_path.name.lower().endswith(
            (".zip", ".tar.gz", ".tgz")
        ):
            echo(f"Extracting archive {schema_path.name}...")
            temp_dir = extract_archive(schema_path)
            actual_schema_path = Path(temp_dir)
            if verbose:
                echo(f"  Extracted to: {temp_dir}")

        if verbose:
            echo(f"Schema: {actual_schema_path}")
            echo(f"Output: {output}")

        # Parse schema
        echo("Parsing schema...")
        ir = SchemaParser(str(actual_schema_path)).parse_all()

        if verbose:
            echo(f"  Types: {len(ir.types)}")
            echo(f"  Interfaces: {len(ir.interfaces)}")
            echo(f"  Unions: {len(ir.unions)}")
            echo(f"  Inputs: {len(ir.inputs)}")
            echo(f"  Enums: {len(ir.enums)}")
            echo(f"  Scalars: {len(ir.scalars)}")
            echo(f"  Entities: {len([t for t in ir.types.values() if t.keys])}")

        hooks = HookRunner()
        if exclude_prefix:
            hooks.add_pre_hook(FilterTypesHook(exclude_prefix=exclude_prefix))
        if header:
            hooks.add_post_hook(AddHeaderHook(header))

        # Generate declarations
        echo("Generating resolver types...")
        generator = ResolverTypeGenerator(ir, config, hooks=hooks, template_dir=template_dir)
        if to_stdout:
            click.echo(generator.generate(), nl=False)
        else:
            output_path = Path(output).resolve()
            generator.write(str(output_path))
            echo(f"Done! Generated resolver types in {output_path}")
    except TranslationError as e:
        for diagnostic in e.diagnostics:
            click.echo(f"  {diagnostic}", err=True)
        raise click.ClickException(e.message) from e
    except (ConfigError, FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
