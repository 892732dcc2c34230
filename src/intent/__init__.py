"""Command classification, resolution and routing."""

from __future__ import annotations


def get_router(config: dict, llm=None, bias_tracker=None, sink=None):
    """Create a CommandRouter wired from config.

    Imports are deferred: the defaults engine imports intent.models, so the
    package itself must stay import-free.
    """
    from defaults import get_engine
    from intent.presets import load_presets
    from intent.remote import RemoteResolver
    from intent.router import CommandRouter
    from llm import get_llm

    llm = llm or get_llm(config)
    return CommandRouter(
        config,
        RemoteResolver(llm, config),
        presets=load_presets(config.get("presets_path")),
        engine=get_engine(config, bias_tracker),
        sink=sink,
    )
