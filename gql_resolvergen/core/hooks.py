"""Hooks around resolver type generation.

A pre-generate hook sees the parsed schema before any declaration is
emitted and returns the schema to emit from. A post-generate hook sees the
finished TypeScript text and returns what gets written.

    class StrictNulls:
        def post_generate(self, filename, content):
            return content.replace("T | null | undefined", "T | null")

    hooks = HookRunner()
    hooks.add_post_hook(StrictNulls())
    ResolverTypeGenerator(ir, hooks=hooks).generate()
"""

import logging
from dataclasses import replace
from typing import Protocol, runtime_checkable

from .ir import IRSchema, IRType, IRUnion

logger = logging.getLogger(__name__)


@runtime_checkable
class PreGenerateHook(Protocol):
    """Rewrites the schema before declarations are emitted."""

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Rewrites the generated declaration file.

    ``filename`` is the base name of the output file, ``resolvers.ts``
    when the text is not written anywhere.
    """

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Puts a fixed header, such as ``/* eslint-disable */``, above the banner."""

    def __init__(self, header: str):
        self.header = header.rstrip("\n")

    def post_generate(self, _filename: str, content: str) -> str:
        return f"{self.header}\n\n{content}"


class FilterTypesHook:
    """Leaves definitions out of the generated file by name.

    A name is kept when it matches no ``exclude_*`` affix and every given
    ``include_*`` affix. Union members and implemented interfaces that were
    filtered out are dropped as well, so no ``__resolveType`` names a type
    that has no declarations.

    The input schema is not modified; a filtered copy is returned.
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def keeps(self, name: str) -> bool:
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, ir: IRSchema) -> IRSchema:
        kept = {}
        for name, definition in ir.definitions.items():
            if not self.keeps(name):
                logger.debug("Filtering out %s", name)
                continue
            if isinstance(definition, IRUnion):
                definition = replace(
                    definition, members=[m for m in definition.members if self.keeps(m)]
                )
            elif isinstance(definition, IRType):
                definition = replace(
                    definition, interfaces=[i for i in definition.interfaces if self.keeps(i)]
                )
            kept[name] = definition
        return IRSchema(definitions=kept)


class HookRunner:
    """Ordered pre- and post-generate hooks for one generator."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, ir: IRSchema) -> IRSchema:
        for hook in self.pre_hooks:
            ir = hook.pre_generate(ir)
        return ir

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
