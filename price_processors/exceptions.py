class UnsupportedImportFormat(Exception):
    """
    Raised when an uploaded file is neither CSV nor Excel workbook
    """
    def __init__(self, filename: str, *args: object) -> None:
        super().__init__('Unsupported file format: %s. Please upload CSV or XLSX file.' % filename, *args)


class InvalidImportSheet(Exception):
    """
    Raised when no monitoring sheet header row could be located
    """
    def __init__(self, message, *args: object) -> None:
        super().__init__('Invalid import sheet - ' + message, *args)


class UnsupportedReportFormat(Exception):
    def __init__(self, fmt: str, *args: object) -> None:
        super().__init__('Unsupported report format: %s' % fmt, *args)


class EmptyLetterSelection(Exception):
    """
    Raised when a letter of inquiry is requested without any flagged record
    """
    def __init__(self, *args: object) -> None:
        super().__init__('No records selected for letter of inquiry', *args)
