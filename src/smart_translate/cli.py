import os
import signal
import subprocess
import sys
import time
from dataclasses import replace

import click

from smart_translate import __version__
from smart_translate.action import TranslateAction
from smart_translate.env import API_KEY_PLACEHOLDER, ConfigErrors, read_env
from smart_translate.host import ConsoleHost, Modifiers
from smart_translate.languages import LANGUAGE_NAMES
from smart_translate.packages.translator import DEFAULT_MODEL, VALID_MODELS, Translator
from smart_translate.paths import get_config_file, get_log_dir, get_pid_file

PID_FILE = get_pid_file()
STDERR_LOG = get_log_dir() / "stderr.log"

OPENAI_KEYS_URL = "https://platform.openai.com/account/api-keys"


def get_pid():
    """Get the PID from the PID file, or None if invalid/missing."""
    if not PID_FILE.exists():
        return None
    try:
        return int(PID_FILE.read_text().strip())
    except (ValueError, FileNotFoundError):
        return None


def is_running():
    """Check if the daemon is running."""
    pid = get_pid()
    if pid is None:
        return False

    try:
        os.kill(pid, 0)
        return True
    except (ProcessLookupError, OSError):
        PID_FILE.unlink(missing_ok=True)
        return False


def _read_env_or_exit():
    try:
        return read_env()
    except ConfigErrors as e:
        click.secho(f"Invalid configuration:\n{e}", fg="red", err=True)
        click.echo("Run 'smart-translate config edit' to fix.", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="smart-translate")
def cli():
    """Smart Translate CLI."""
    pass


@cli.command()
def init():
    """Interactive init wizard for first-time configuration."""
    config_file = get_config_file()

    click.echo()
    click.secho("Smart Translate Setup", fg="cyan", bold=True)
    click.echo("=" * 40)
    click.echo()

    api_key = click.prompt(
        click.style(
            f"1. Get an OpenAI API key at: {OPENAI_KEYS_URL} and paste it here",
            fg="yellow",
        ),
        hide_input=True,
    )
    if not api_key or api_key == API_KEY_PLACEHOLDER:
        click.secho("Invalid API key. Run 'smart-translate init' again.", fg="red")
        sys.exit(1)

    click.echo()
    click.secho("2. Configure model, languages and hotkey", fg="yellow")
    click.echo("   (Press Enter to accept defaults)")
    click.echo()

    model = click.prompt(
        "   Model",
        default=DEFAULT_MODEL,
        type=click.Choice(VALID_MODELS),
        show_default=True,
    )
    from_lang = click.prompt(
        "   Translate from", default="Chinese", type=click.Choice(LANGUAGE_NAMES), show_choices=False
    )
    to_lang = click.prompt(
        "   Translate to", default="English", type=click.Choice(LANGUAGE_NAMES), show_choices=False
    )
    hotkey = click.prompt("   Translate hotkey", default="ctrl+alt+t", show_default=True)

    config_content = f"""\
# Smart Translate Configuration
# Edit with: smart-translate config edit

OPENAI_API_KEY={api_key}

OPENAI_MODEL={model}

TRANSLATE_FROM={from_lang}

TRANSLATE_TO={to_lang}

TRANSLATE_HOTKEY={hotkey}

OPENAI_TIMEOUT=60
"""
    config_file.write_text(config_content)

    click.echo()
    click.secho("Configuration saved!", fg="green", bold=True)
    click.echo(f"   Config file: {config_file}")
    click.echo()

    try:
        read_env()
    except ConfigErrors as e:
        click.secho(f"Config validation warning:\n{e}", fg="yellow")
        click.echo("   Run 'smart-translate config edit' to fix.")
        return

    if click.confirm("Start smart-translate now?", default=True):
        click.echo()
        _start_daemon()
        click.echo(f"   Select text and press {hotkey} to translate it")
    else:
        click.echo("Run 'smart-translate start' when ready.")


def _start_daemon():
    """Start the daemon. Returns True on success, False on failure."""
    if is_running():
        click.echo(f"Smart Translate is already running (PID: {get_pid()})")
        return False

    try:
        stderr_file = open(STDERR_LOG, "w")
        process = subprocess.Popen(
            [sys.executable, "-m", "smart_translate.main"],
            stdout=subprocess.DEVNULL,
            stderr=stderr_file,
            start_new_session=True,
        )

        PID_FILE.write_text(str(process.pid))

        # Catch immediate crashes (bad config, missing permissions)
        time.sleep(0.3)

        exit_code = process.poll()
        if exit_code is not None:
            stderr_file.close()
            click.echo(
                f"Smart Translate crashed during startup (exit code: {exit_code})",
                err=True,
            )
            if STDERR_LOG.exists():
                stderr_content = STDERR_LOG.read_text().strip()
                if stderr_content:
                    click.echo(f"\nError output:\n{stderr_content}", err=True)
            PID_FILE.unlink(missing_ok=True)
            return False

        click.echo(f"Smart Translate started (PID: {process.pid})")
        return True
    except Exception as e:
        click.echo(f"Failed to start Smart Translate: {e}", err=True)
        return False


def _stop_daemon():
    """Stop the daemon. Returns True on success, False on failure."""
    if not is_running():
        click.echo("Smart Translate is not running")
        return False

    pid = get_pid()
    if pid is None:
        click.echo("Could not read PID file")
        return False

    try:
        os.kill(pid, signal.SIGINT)
        time.sleep(0.5)

        if is_running():
            os.kill(pid, signal.SIGTERM)
            time.sleep(0.5)

        PID_FILE.unlink(missing_ok=True)
        click.echo("Smart Translate stopped")
        return True
    except ProcessLookupError:
        click.echo("Process not found, cleaning up PID file")
        PID_FILE.unlink(missing_ok=True)
        return True
    except Exception as e:
        click.echo(f"Failed to stop Smart Translate: {e}", err=True)
        return False


@cli.command()
def start():
    """Start the Smart Translate daemon."""
    if not _start_daemon():
        sys.exit(1)


@cli.command()
def stop():
    """Stop the Smart Translate daemon."""
    if not _stop_daemon():
        sys.exit(1)


@cli.command()
def restart():
    """Restart the Smart Translate daemon."""
    _stop_daemon()
    time.sleep(0.5)
    if not _start_daemon():
        sys.exit(1)


@cli.command()
def status():
    """Check the status of Smart Translate."""
    if is_running():
        click.echo(f"Smart Translate is running (PID: {get_pid()})")
    else:
        click.echo("Smart Translate is not running")


@cli.command()
@click.option("--lines", "-n", default=50, help="Number of lines to show (default: 50)")
@click.option("--stderr", is_flag=True, help="Show stderr log instead of main log")
def logs(lines, stderr):
    """Show recent logs from the daemon."""
    log_file = STDERR_LOG if stderr else get_log_dir() / "info.log"

    if not log_file.exists():
        click.echo(f"Log file not found: {log_file}")
        return

    log_lines = log_file.read_text().strip().split("\n")
    for line in log_lines[-lines:]:
        click.echo(line)


@cli.command()
@click.argument("text", required=False)
@click.option("--from", "from_lang", type=click.Choice(LANGUAGE_NAMES), default=None,
              show_choices=False, help="Language to translate from. Defaults to config value.")
@click.option("--to", "to_lang", type=click.Choice(LANGUAGE_NAMES), default=None,
              show_choices=False, help="Target language. Defaults to config value.")
@click.option("--model", type=click.Choice(VALID_MODELS), default=None,
              help="Model to use. Defaults to config value.")
@click.option("--copy", is_flag=True, help="Copy the result to the clipboard instead of printing it.")
def translate(text, from_lang, to_lang, model, copy):
    """Translate TEXT (or stdin) and print the result."""
    if text is None:
        text = click.get_text_stream("stdin").read()
    if not text.strip():
        click.echo("Nothing to translate", err=True)
        sys.exit(1)

    env = _read_env_or_exit()
    options = env.options()
    overrides = {
        k: v
        for k, v in {"from_lang": from_lang, "to_lang": to_lang, "model": model}.items()
        if v is not None
    }
    options = replace(options, **overrides)

    action = TranslateAction(lambda o: Translator(o.apikey, timeout=env.OPENAI_TIMEOUT))
    host = ConsoleHost(Modifiers(shift=copy))
    if not action.execute(text, options, host):
        sys.exit(1)


@cli.command()
def languages():
    """List the languages that can be translated from and to."""
    for name in LANGUAGE_NAMES:
        click.echo(name)


@cli.command()
def models():
    """List the supported models."""
    for name in VALID_MODELS:
        marker = " (default)" if name == DEFAULT_MODEL else ""
        click.echo(f"{name}{marker}")


@cli.group()
def config():
    """Manage configuration."""
    pass


@config.command(name="show")
def config_show():
    """Show current configuration values."""
    env = _read_env_or_exit()
    click.echo(f"Current Configuration:\n{env}")


@config.command(name="edit")
@click.option(
    "--editor",
    "-e",
    default=None,
    help="Editor to use (e.g., 'nvim', 'vim', 'code'). Defaults to $EDITOR or $VISUAL.",
)
def config_edit(editor):
    """Edit configuration in your default editor. Restarts daemon if running."""
    env_file = get_config_file()
    was_running = is_running()

    if editor is None:
        editor = os.environ.get("EDITOR", os.environ.get("VISUAL", "vi"))

    while True:
        try:
            subprocess.run([editor, str(env_file)], check=True)
            # Some editors ('code', 'subl') return before the file is saved
            click.echo("\nPress Enter when you're done editing and have saved the file...")
            input()
        except subprocess.CalledProcessError:
            click.echo("Editor exited with error", err=True)
            sys.exit(1)
        except FileNotFoundError:
            click.echo(f"Editor '{editor}' not found. Set EDITOR environment variable.", err=True)
            sys.exit(1)

        try:
            read_env()
            click.echo("Configuration valid.")
            break
        except ConfigErrors as e:
            click.echo(f"\n{e}", err=True)
            if not click.confirm("Edit again?", default=True):
                click.echo("Aborted.")
                return

    if was_running:
        click.echo("Restarting daemon to apply changes...")
        _stop_daemon()
        time.sleep(0.5)
        _start_daemon()


if __name__ == "__main__":
    cli()
