"""CLI entrypoint for camrelay."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import fire  # type: ignore[import-untyped]

from camrelay.app import Application
from camrelay.config import ConfigError, build_config, load_config
from camrelay.logging_setup import configure_logging


def setup_logging(level: str = "INFO", camera_name: str | None = None) -> None:
    """Configure logging for CLI."""
    configure_logging(log_level=level, camera_name=camera_name)


class CamRelay:
    """camrelay - relay new camera snapshots and clips to a webhook."""

    def run(
        self,
        camera_name: str | None = None,
        webhook_url: str | None = None,
        config: str | None = None,
        log_level: str = "INFO",
    ) -> None:
        """Watch media directories and notify the webhook about new files.

        Args:
            camera_name: Camera name sent in every notification (required)
            webhook_url: Endpoint to POST notifications to; omit to disable delivery
            config: Optional path to YAML config file
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        try:
            cfg = build_config(
                None if camera_name is None else str(camera_name),
                webhook_url,
                Path(config) if config else None,
            )
        except ConfigError as e:
            print(f"✗ Config invalid: {e}", file=sys.stderr)
            sys.exit(1)

        setup_logging(log_level, cfg.camera_name)
        app = Application(cfg)

        try:
            asyncio.run(app.run())
        except KeyboardInterrupt:
            pass  # Handled by signal handlers

    def validate(self, config: str) -> None:
        """Validate config file without running.

        Args:
            config: Path to YAML config file
        """
        config_path = Path(config)

        try:
            cfg = load_config(config_path)
        except ConfigError as e:
            print(f"✗ Config invalid: {e}", file=sys.stderr)
            sys.exit(1)

        print(f"✓ Config valid: {config_path}")
        print(f"  Camera: {cfg.camera_name or '(from command line)'}")
        for target in cfg.targets:
            print(
                f"  Target {target.name}: {target.root_dir}/*/{target.pattern} "
                f"(policy={target.policy}, copy_to={target.copy_latest_to})"
            )
        print(f"  Webhook: {cfg.webhook.url or '(disabled)'} (verify_tls={cfg.webhook.verify_tls})")
        print(f"  State dir: {cfg.state.dir}")


def main() -> None:
    """Main CLI entrypoint."""
    # Strip --help/-h when it's the only arg so Fire shows its commands list
    if len(sys.argv) == 2 and sys.argv[1] in ("--help", "-h"):
        sys.argv.pop()
    fire.Fire(CamRelay)


if __name__ == "__main__":
    main()
