import argparse
import sys

from cxxglue import utils
from cxxglue.conversion import ContractViolation
from cxxglue.glue import CxxGlue
from cxxglue.logging import configure_logging, get_logger
from cxxglue.needs_loader import NeedsFileError
from cxxglue.thirdparty import check_all_requirements

logger = get_logger(__name__)


def parse_generate(parser):
    parser.add_argument(
        'needs_file',
        type=str,
        help='The JSON file describing the glue functions to generate'
    )

    parser.add_argument(
        '--out-dir',
        '-o',
        type=str,
        required=True,
        help='The directory the header, translation unit and Rust adapters are written to'
    )

    parser.add_argument(
        '--config',
        '-c',
        type=str,
        dest='config_file',
        help='The configuration file to use'
    )

    parser.add_argument(
        '--header-name',
        type=str,
        default=None,
        help='File name of the generated header, default taken from [generator].header_name'
    )

    parser.add_argument(
        '--rustfmt',
        action='store_true',
        default=None,
        help='Format the generated Rust adapters with rustfmt'
    )

    parser.add_argument(
        '--clang-format',
        action='store_true',
        default=None,
        help='Format the generated C++ with clang-format'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        help='Console log level (DEBUG, INFO, WARNING, ...)'
    )

    parser.add_argument(
        '--log-dir',
        type=str,
        default=None,
        help='Also write logs to this directory'
    )


def _configure_logging_from_args(config, args):
    configure_logging(
        config,
        console_level_override=args.log_level,
        log_dir_override=args.log_dir,
    )


def generate(parser, args) -> int:
    try:
        config = utils.try_load_config(args.config_file)
    except (FileNotFoundError, TypeError) as exc:
        parser.error(str(exc))
    _configure_logging_from_args(config, args)

    glue = CxxGlue(
        out_dir=args.out_dir,
        config=config,
        header_name=args.header_name,
        rustfmt=args.rustfmt,
        clang_format=args.clang_format,
    )
    try:
        output = glue.run_file(args.needs_file)
    except (NeedsFileError, ContractViolation, OSError) as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    if output.is_empty:
        print('No glue needed, nothing written')
    else:
        print(f'✅ Generated {output.function_count} function(s):')
        for path in output.written:
            print(f'  {path}')
    return 0


def check_tools(parser, args) -> int:
    missing = check_all_requirements()
    if missing:
        print(f'Missing optional tools: {", ".join(missing)}')
        return 1
    print('All optional tools found')
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='cxxglue: C++ wrapper and Rust adapter generator for Rust/C++ bindings'
    )

    subparsers = parser.add_subparsers(
        dest='subcommand',
        description='valid subcommands',
        help='Use one of these subcommands followed by -h for additional help',
        required=True
    )

    generate_parser = subparsers.add_parser(
        'generate',
        help='Generate C++ glue and Rust adapters from a needs file'
    )
    subparsers.add_parser(
        'check-tools',
        help='Report which optional formatters are installed'
    )

    parse_generate(generate_parser)

    args = parser.parse_args(argv)

    match args.subcommand:
        case 'generate':
            sys.exit(generate(parser, args))
        case 'check-tools':
            sys.exit(check_tools(parser, args))
        case _:
            parser.print_help()


if __name__ == '__main__':
    main()
