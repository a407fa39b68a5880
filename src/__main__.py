#!/usr/bin/env python3
"""
turf - comment-directive markup compiler

Compiles a .kit-style document from inputdir into outputdir. HTML comments in
the source carry directives:

    <!--@title My Site-->          define a variable
    <!--@title-->                  reference it (<!--@title?--> if optional)
    <!--@include header, footer--> splice other files, compiling templates

Usage:
    turf inputdir/ outputdir/ --inputFile index.kit

Examples:
    # Basic compilation
    turf site/ public/ --inputFile index.kit

    # With initial variables and an explicit include root
    turf site/ public/ --inputFile pages/about.kit --variablesFile vars.yaml --rootDir site/

    # Verbose output
    turf site/ public/ --inputFile index.kit -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin

from .config import appsettings
from .lib import compile_file, TurfError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  _              __
 | |_ _   _ _ __/ _|
 | __| | | | '__| |_
 | |_| |_| | |  |  _|
  \__|\__,_|_|  |_|

  Comment-directive markup compiler
"""

# Define CLI arguments
parser = ArgumentParser(
    description="turf - compile documents with comment-embedded variables and includes",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input document (relative to inputdir)"
)

parser.add_argument(
    "--variablesFile",
    default=None,
    type=str,
    help="YAML mapping of initial variable values",
)

parser.add_argument(
    "--rootDir",
    default=None,
    type=str,
    help="Root directory for '/'-prefixed includes. Defaults to the input file's directory",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def variables_load(path: Path) -> dict:
    """
    Load initial variables from a YAML mapping.

    Scalar values are converted to strings; nested structures are rejected.
    """
    with open(path, "r", encoding=appsettings.encoding) as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of variable names to values")

    variables = {}
    for name, value in data.items():
        if isinstance(value, (dict, list)):
            raise ValueError(f"Variable '{name}' in {path} must be a scalar")
        variables[str(name)] = "" if value is None else str(value)
    return variables


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input document
            - compileRootDir: Resolved include root
            - variables: Initial variables from --variablesFile
            - outputFile: Path of the compiled output
            - envOK: True if environment is valid

    Exits:
        1 if the input file or variables file is missing or invalid
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)
    LOG("Checking environment...", level=2)

    input_file = (state.inputdir / state.inputFile).resolve()
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.compileRootDir = Path(state.rootDir).resolve() if state.rootDir else input_file.parent
    LOG(f"Include root: {state.compileRootDir}", level=2)

    if state.variablesFile:
        variables_file = Path(state.variablesFile)
        if not variables_file.is_absolute():
            variables_file = state.inputdir / variables_file
        try:
            state.variables = variables_load(variables_file)
        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f"Error: Failed to load variables: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Loaded {len(state.variables)} variables from {variables_file}", level=2)

    relative_output = Path(state.inputFile).with_suffix(appsettings.output_extension)
    state.outputFile = state.outputdir / relative_output
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def source_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile the input document.

    Returns:
        ProgramState with added field:
            - compiledText: Compiled document

    Exits:
        1 if compilation fails
    """

    state = inputstate.copy()

    LOG(f"Compiling {state.inputSourceFile.name}...", level=1)
    try:
        state.compiledText = compile_file(
            str(state.inputSourceFile),
            variables=state.variables,
            root_dir=str(state.compileRootDir),
        )
    except TurfError as e:
        print(f"Compile error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    except OSError as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Compiled {len(state.compiledText)} characters", level=2)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the compiled document to outputFile.

    Exits:
        1 if there is nothing to write
    """
    state = inputstate.copy()

    if state.compiledText is None:
        print("Error: No compiled output available", file=sys.stderr)
        sys.exit(1)

    state.outputFile.parent.mkdir(parents=True, exist_ok=True)
    state.outputFile.write_text(state.compiledText, encoding=appsettings.encoding)
    LOG(f"Wrote {state.outputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results to user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    LOG("\n✓ Compilation successful!", level=1)
    LOG(f"  Input:  {state.inputSourceFile}", level=1)
    LOG(f"  Output: {state.outputFile}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="turf - comment-directive markup compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile a document from inputdir into outputdir.

    Orchestrates the full pipeline:
        1. env_check: Validate paths, load variables
        2. source_compile: Compile the document
        3. output_write: Write the compiled file
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, source_compile, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
