"""Resolver type generator for GraphQL schemas.

Assembles the per-type declarations into a single TypeScript file using a
Jinja2 template: banner, utility aliases, the top-level ``Resolvers`` map
and then every emitted unit in document order.

Supports custom templates via the template_dir parameter:
    generator = ResolverTypeGenerator(ir, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from graphql import DocumentNode
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from .config import TranslationConfig, merge_config
from .emitter import DeclarationEmitter
from .hooks import HookRunner
from .ir import IRSchema
from .parser import parse_document

logger = logging.getLogger(__name__)

TEMPLATE_NAME = "resolvers.ts.j2"
DEFAULT_FILENAME = "resolvers.ts"


class ResolverTypeGenerator:
    """Generates TypeScript resolver declarations from GraphQL IR.

    Available templates to override:
        - resolvers.ts.j2: the whole generated document

    Example:
        generator = ResolverTypeGenerator(
            ir=schema,
            config=TranslationConfig(internal_enum_value_support=True),
        )
        text = generator.generate()
    """

    def __init__(
        self,
        ir: IRSchema,
        config: Optional[TranslationConfig] = None,
        hooks: Optional[HookRunner] = None,
        template_dir: Optional[str] = None,
    ):
        """Initialize the generator.

        Args:
            ir: The intermediate representation of the GraphQL schema
            config: Translation options; defaults are used when omitted
            hooks: Optional pre/post generation hooks
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        self.ir = ir
        self.config = config or TranslationConfig()
        self.hooks = hooks or HookRunner()
        self.template_dir = template_dir

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_resolvergen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def generate(self, filename: str = DEFAULT_FILENAME) -> str:
        """Generate the declaration file and return its text.

        Raises:
            TranslationError: if any type of the schema cannot be translated.
        """
        ir = self.hooks.run_pre_hooks(self.ir)
        emitter = DeclarationEmitter(ir, self.config)
        units = emitter.emit_all()
        logger.debug("Emitted %d declaration units", len(units))

        content = self._render(self._context(emitter, units))
        return self.hooks.run_post_hooks(filename, content)

    def _context(self, emitter: DeclarationEmitter, units) -> dict[str, Any]:
        return {
            "banner_command": self.config.banner_command,
            "generics": emitter.generics,
            "resolver_map": [u.resolver_map_member for u in units if u.resolver_map_member],
            "units": units,
        }

    def _render(self, context: dict[str, Any]) -> str:
        template = self.env.get_template(TEMPLATE_NAME)
        return template.render(context)

    def write(self, output_path: str) -> str:
        """Generate and write the declaration file. Returns the generated text."""
        content = self.generate(os.path.basename(output_path))
        directory = os.path.dirname(output_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(content)
        return content


def translate(
    document: DocumentNode | str,
    config: Optional[TranslationConfig] = None,
    **overrides: Any,
) -> str:
    """Translate a schema document into TypeScript resolver declarations.

    Args:
        document: A parsed graphql-core document or SDL text
        config: Translation options
        **overrides: Individual options applied on top of ``config``,
            e.g. ``internal_enum_value_support=True``

    Raises:
        TranslationError: with one diagnostic per problem found.
    """
    if overrides:
        config = merge_config(config, overrides)
    return ResolverTypeGenerator(parse_document(document), config).generate()
