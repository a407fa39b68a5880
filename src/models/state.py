"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Callable, Dict, Optional, Type, TypeVar
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, variablesFile, rootDir
        - env_check: inputSourceFile, compileRootDir, variables, outputFile, envOK
        - source_compile: compiledText
        - output_write: (writes outputFile)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source file
        outputdir: Directory the compiled file is written to
        verbosity: Logging verbosity level (1-3)
        inputFile: Source filename (relative to inputdir)
        variablesFile: Optional YAML file of initial variables
        rootDir: Optional root for '/'-prefixed includes
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the source file
        compileRootDir: Resolved include root
        variables: Initial variables loaded from variablesFile
        outputFile: Path the compiled output is written to
        compiledText: Compiled document
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    variablesFile: Optional[str] = field(default=None)
    rootDir: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    compileRootDir: Path = field(default=Path("/"))
    variables: Dict[str, str] = field(default_factory=dict)
    outputFile: Path = field(default=Path("/"))
    compiledText: Optional[str] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, variablesFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**{**filtered_options, "inputdir": inputdir, "outputdir": outputdir})

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_compile,
            output_write,
            results_report
        )
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
