import os
import sys
from typing import Optional

import click
from rich.console import Console

from .cache import TranslationCache
from .config import BrowserConfig, DEBUG_ENV
from .debug import get_logger
from .dictionary import DictionaryError, load_dictionary
from .remote import GoogleTranslator, OfflineTranslator, RemoteTranslator
from .resolver import NameResolver


def build_translator(config: BrowserConfig) -> RemoteTranslator:
    if not config.remote_enabled:
        return OfflineTranslator()
    return GoogleTranslator(endpoint=config.endpoint, timeout=config.timeout)


def build_resolver(config: BrowserConfig, cache: Optional[TranslationCache] = None) -> NameResolver:
    """Wire cache, dictionary and remote client; raises DictionaryError on a bad dictionary file."""
    return NameResolver(
        cache if cache is not None else TranslationCache(),
        dictionary=load_dictionary(config.dictionary_path),
        translator=build_translator(config),
        source_lang=config.source_lang,
        target_lang=config.target_lang,
    )


@click.command()
@click.option(
    '--path',
    'start_path',
    required=False,
    default=None,
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Directory to open first (defaults to the home directory).",
)
@click.option(
    '--dictionary',
    'dictionary_path',
    required=False,
    default=None,
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="JSON file of extra name -> translation pairs merged over the built-in ones.",
)
@click.option(
    '--offline',
    is_flag=True,
    default=False,
    help="Never call the remote translation service.",
    show_default=True,
)
@click.option(
    '--timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Remote lookup timeout in seconds.",
)
@click.option(
    '--debug',
    is_flag=True,
    default=False,
    help='Enable verbose debug logging to translate_browser_debug.log',
    show_default=True,
)
def main(start_path, dictionary_path, offline, timeout, debug):
    """
    Browse a directory and rename entries to their French translation.
    """
    console = Console()
    if debug:
        os.environ[DEBUG_ENV] = '1'
        console.print('[dim]Debug logging enabled -> translate_browser_debug.log[/dim]')
    log = get_logger("main")

    config = BrowserConfig.from_env().with_overrides(
        start_path=start_path,
        dictionary_path=dictionary_path,
        timeout=timeout,
        offline=offline,
        debug=debug,
    )
    log.debug(
        "start: path=%s dictionary=%s remote=%s endpoint=%s timeout=%s",
        config.start_path,
        config.dictionary_path,
        config.remote_enabled,
        config.endpoint,
        config.timeout,
    )

    try:
        resolver = build_resolver(config)
    except DictionaryError as e:
        console.print(f"[bold red]Erreur:[/bold red] {e}")
        sys.exit(1)

    # Imported late so --help stays fast and bad options never touch the terminal.
    from .app import TranslateBrowserApp

    try:
        app = TranslateBrowserApp(config, resolver=resolver)
        app.run()
    except Exception as e:
        log.exception("application failed")
        console.print(f"[bold red]Erreur:[/bold red] {e}")
        sys.exit(1)
    finally:
        close = getattr(resolver.translator, "close", None)
        if close:
            close()

    if getattr(app, "return_code", 0):
        sys.exit(app.return_code)


if __name__ == "__main__":
    main()
