#!/usr/bin/env python3
"""
Start the Wanderplan API server, or run one of the configuration utilities.
"""

import sys
import argparse

from wanderplan.config.loader import ConfigLoader, load_config_for_environment
from wanderplan.config.settings import Environment, Settings

SERVER_OVERRIDES = ("host", "port", "workers")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wanderplan API Server")
    parser.add_argument(
        "--env",
        choices=[e.value for e in Environment],
        default=None,
        help="Environment to run (default: ENVIRONMENT env var or development)",
    )
    parser.add_argument("--host", default=None, help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Bind port")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")

    utilities = parser.add_mutually_exclusive_group()
    utilities.add_argument("--list-envs", action="store_true", help="List .env.<name> files found")
    utilities.add_argument("--validate-env", metavar="ENV", help="Check an environment's .env file")
    utilities.add_argument("--create-sample", metavar="ENV", help="Write .env.<ENV>.sample")
    return parser


def run_utility(args: argparse.Namespace) -> bool:
    """Handle the configuration utilities; returns False when none was requested."""
    if args.list_envs:
        for env in ConfigLoader.get_available_environments():
            print(env)
        return True

    if args.validate_env:
        if not ConfigLoader.validate_environment_config(args.validate_env):
            print(f"Configuration for '{args.validate_env}' is invalid or missing")
            sys.exit(1)
        print(f"Configuration for '{args.validate_env}' is valid")
        return True

    if args.create_sample:
        print(ConfigLoader.create_sample_env_file(args.create_sample))
        return True

    return False


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    for name in SERVER_OVERRIDES:
        value = getattr(args, name)
        if value is not None:
            setattr(settings, name, value)
    settings.reload = settings.reload or args.reload
    settings.debug = settings.debug or args.debug
    return settings


def main():
    args = build_parser().parse_args()
    if run_utility(args):
        return

    try:
        settings = apply_overrides(load_config_for_environment(args.env), args)
    except ValueError as e:
        print(f"Failed to load configuration: {e}")
        sys.exit(1)

    print(
        f"Starting {settings.app_name} v{settings.app_version} "
        f"[{settings.environment.value}] on {settings.host}:{settings.port}"
    )

    import uvicorn

    uvicorn.run(
        "wanderplan.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        workers=1 if settings.reload else settings.workers,
        log_level=settings.log_level.value.lower(),
    )


if __name__ == "__main__":
    main()
