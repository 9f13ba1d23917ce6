"""CLI entry point for clinic-scribe."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from clinic_scribe import __version__


@click.command()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(exists=True),
    help='Path to YAML config file.',
)
@click.option(
    '-o',
    '--output-dir',
    default=None,
    type=click.Path(),
    help='Base output directory for saved sessions.',
)
@click.option(
    '-p',
    '--patient',
    'patient_id',
    default='default',
    show_default=True,
    help='Patient id the finished session is filed under.',
)
@click.option(
    '-t',
    '--title',
    default=None,
    help='Session title (prefills the form; batch mode defaults to the file name).',
)
@click.option(
    '-f',
    '--transcript-file',
    'transcript_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Summarize a plain-text transcript and save it as a session (no TUI).',
)
@click.version_option(version=__version__)
def cli(config_path, output_dir, patient_id, title, transcript_file):
    """clinic-scribe -- record a clinical conversation and summarize it."""
    from clinic_scribe.l3_interface_adapters.gateways.yaml_config_loader import (  # noqa: PLC0415 -- deferred: yaml stack not loaded on --help
        YamlConfigLoader,
    )
    from clinic_scribe.l4_frameworks_and_drivers.config import (  # noqa: PLC0415 -- deferred: not needed for --help
        load_settings,
    )

    try:
        config, infra = load_settings(YamlConfigLoader(), config_path, output_dir)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    out_dir = Path(config.output.directory)

    if infra.summarizer == 'llm':
        _preflight_llm(infra, config.summary.model)

    if transcript_file:
        from clinic_scribe.l4_frameworks_and_drivers.batch_runner import (  # noqa: PLC0415 -- deferred: batch mode only, not loaded for TUI path
            run_batch,
        )

        run_batch(
            transcript_path=Path(transcript_file),
            config=config,
            out_dir=out_dir,
            infra=infra,
            patient_id=patient_id,
            title=title,
        )
        return

    from clinic_scribe.l4_frameworks_and_drivers.apps.session import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for --help
        SessionApp,
    )
    from clinic_scribe.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: Textual TUI not loaded for --help
        DependencyContainer,
    )

    container = DependencyContainer(config, out_dir, infra=infra, patient_id=patient_id)
    app = SessionApp(
        config=config,
        output_dir=out_dir,
        controller=container.controller,
        title=title or '',
    )
    app.run()


def _preflight_llm(infra, model: str) -> bool:
    from clinic_scribe.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: preflight only runs for the llm backend
        DependencyContainer,
    )

    client = DependencyContainer.build_llm_client(infra)
    ok, err = client.check_model(model)
    if not ok:
        click.echo(f'Warning: summary model not ready ({err}). Summaries will fail.', err=True)
        click.echo('Transcript capture will still work; finishing can be retried later.', err=True)
    return ok
