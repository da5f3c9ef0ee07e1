# mcapi/cli.py
# Process entry point: mcapi --config config.json [--gencfg]

import sys

import click

from . import create_app
from .config import ConfigError, generate_config, parse_bind_address
from .utils.logging import get_logger
from .utils.reporting import flush, report_exception


@click.command()
@click.option("--config", "config_path", default="config.json", show_default=True,
              help="path to configuration file")
@click.option("--gencfg", is_flag=True, help="generate configuration file with sane defaults")
def main(config_path, gencfg):
    logger = get_logger()

    if gencfg:
        generate_config(config_path)
        logger.info("Saved configuration file with sane defaults, please update as needed")
        return

    try:
        app = create_app(config_file=config_path)
        host, port = parse_bind_address(app.config["HTTP_APP_HOST"])
    except ConfigError as e:
        logger.error("%s", e)
        report_exception(e)
        flush()
        sys.exit(1)

    scheduler = app.extensions["mcapi.scheduler"]
    scheduler.start()
    logger.info("mcapi listening on %s:%s, refreshing every %ss", host, port, app.config["REFRESH_INTERVAL"])
    try:
        app.run(host=host, port=port, threaded=True)
    finally:
        scheduler.stop()
        app.extensions["mcapi.dispatcher"].shutdown()


if __name__ == "__main__":
    main()
