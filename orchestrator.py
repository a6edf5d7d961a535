"""Import orchestrator"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

from core.models import Calculator, ImportResult, TableImport, TableRow, ValidationReport
from core.exceptions import StageError
from stages import Receiver, FormulaTranslator, GraphBuilder, CalculatorValidator
from stages.s1_translation import TargetDialect
from ui.progress import ProgressTracker
from config import settings


@dataclass
class ImportContext:
    """State of one import call"""
    name: str
    description: str
    rows: List[TableRow] = field(default_factory=list)
    result: Optional[ImportResult] = None


class CalculatorImporter:
    """Turns spreadsheet tables into calculators.

    Holds only read-only collaborators; every import builds its own context,
    so one importer can serve concurrent calls.
    """

    def __init__(
        self,
        dialect: Union[str, TargetDialect, None] = None,
        progress: Optional[ProgressTracker] = None,
    ):
        self.progress = progress
        self.receiver = Receiver()
        self.translator = FormulaTranslator(dialect)
        self.builder = GraphBuilder(self.translator)
        self.validator = CalculatorValidator()

    @property
    def dialect(self) -> TargetDialect:
        return self.translator.dialect

    def import_from_spreadsheet(
        self,
        tsv_data: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Calculator:
        """Import pasted TSV text; warnings are logged"""
        return self.import_with_warnings(tsv_data, name, description).calculator

    def import_with_warnings(
        self,
        tsv_data: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ImportResult:
        """Import pasted TSV text and return the warnings alongside"""
        ctx = self._context(name, description)
        ctx.rows = self._execute_stage(self.receiver, self.receiver.tsv_parser.parse(tsv_data))
        return self._build(ctx)

    def import_from_file(
        self,
        file_path: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        sheet_name: Optional[str] = None,
    ) -> ImportResult:
        """Import a .tsv/.txt/.xlsx file"""
        ctx = self._context(name, description)
        self._start(self.receiver)
        try:
            ctx.rows = self.receiver.receive_file(file_path, sheet_name)
        except StageError as e:
            self._fail(e)
            raise
        self._complete(self.receiver)
        return self._build(ctx)

    def import_from_workbook(
        self,
        file_path: str,
        sheet_name: Optional[str] = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ImportResult:
        """Import the calculator table of an .xlsx workbook"""
        return self.import_from_file(file_path, name, description, sheet_name)

    def validate(self, calculator: Union[Calculator, Mapping[str, Any]]) -> ValidationReport:
        """Structural validation; returns every problem, never raises"""
        return self._execute_stage(self.validator, calculator)

    def _context(self, name: Optional[str], description: Optional[str]) -> ImportContext:
        return ImportContext(
            name=settings.CALCULATOR_DEFAULT_NAME if name is None else name,
            description=(
                settings.CALCULATOR_DEFAULT_DESCRIPTION if description is None else description
            ),
        )

    def _build(self, ctx: ImportContext) -> ImportResult:
        ctx.result = self._execute_stage(
            self.builder,
            TableImport(name=ctx.name, description=ctx.description, rows=ctx.rows),
        )
        if self.progress:
            self.progress.complete()
        return ctx.result

    def _execute_stage(self, stage, input_data) -> Any:
        """Execute a single stage with progress tracking"""
        self._start(stage)

        if not stage.validate_input(input_data):
            error = StageError(stage.stage_number, "Invalid input")
            self._fail(error)
            raise error

        result = stage.execute(input_data)
        self._complete(stage)
        return result

    def _start(self, stage) -> None:
        if self.progress:
            self.progress.start_stage(stage.stage_number, stage.name)

    def _complete(self, stage) -> None:
        if self.progress:
            self.progress.complete_stage(stage.stage_number)

    def _fail(self, error: StageError) -> None:
        if self.progress:
            self.progress.fail(error.stage, error.message)
