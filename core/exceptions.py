"""Custom exceptions for the calculator importer"""


class CalcSheetError(Exception):
    """Base exception for all importer errors"""
    pass


class StageError(CalcSheetError):
    """Error in a specific stage"""
    def __init__(self, stage: int, message: str):
        super().__init__(f"Stage {stage}: {message}")
        self.stage = stage
        self.message = message


class FileParseError(CalcSheetError):
    """Error reading a table source"""
    def __init__(self, message: str, file_path: str = None):
        super().__init__(message)
        self.file_path = file_path


class ConfigurationError(CalcSheetError):
    """Invalid importer configuration"""
    pass


class CalculatorValidationError(CalcSheetError):
    """Calculator failed structural validation"""
    def __init__(self, errors: list[str]):
        super().__init__(
            f"Calculator is invalid ({len(errors)} error(s)): " + "; ".join(errors)
        )
        self.errors = errors
