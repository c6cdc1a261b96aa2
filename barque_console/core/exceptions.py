class BarqueConsoleError(Exception):
    """Base exception for all barque_console errors"""
    pass

class ConfigError(BarqueConsoleError):
    """Invalid or inconsistent global.json"""
    pass

class RecordContractError(BarqueConsoleError):
    """
    Something that is not a vessel record was handed to the store,
    or a raw record mapping has no identifier
    """
    pass

class CriteriaContractError(BarqueConsoleError):
    """Filter criteria that is neither a FilterCriteria nor a mapping"""
    pass

class StoreNotInitialisedError(BarqueConsoleError):
    """A selector was built or queried without a backing VesselStore"""
    pass

class ImportStructureError(BarqueConsoleError):
    """
    Spreadsheet cannot be imported at all:
    unsupported extension, empty sheet, missing required columns
    """
    pass
