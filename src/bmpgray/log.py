import argparse
import logging


class Log:
    LEVELS = ['debug', 'info', 'warning', 'error']

    _logger = logging.getLogger('bmpgray')

    @staticmethod
    def add_args(parser: argparse.ArgumentParser):
        parser.add_argument('--log-level', default='info', choices=Log.LEVELS, help='Logging verbosity')

    @staticmethod
    def setup(args):
        logging.basicConfig(level=getattr(logging, args.log_level.upper()),
                            format='%(asctime)s [%(levelname)s] %(message)s')

    @staticmethod
    def debug(message: str):
        Log._logger.debug(message)

    @staticmethod
    def info(message: str):
        Log._logger.info(message)

    @staticmethod
    def warning(message: str):
        Log._logger.warning(message)

    @staticmethod
    def error(message: str):
        Log._logger.error(message)
