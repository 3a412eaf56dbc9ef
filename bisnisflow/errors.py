"""Exceptions raised by the import pipeline and checkout."""


class BisnisFlowError(Exception):
    """Base class for user-facing errors."""


class UnrecognizedFormatError(BisnisFlowError):
    def __init__(self, marketplace):
        self.marketplace = marketplace
        super().__init__(
            f"Column format not recognized for {marketplace}. "
            f"Make sure this is the original export file from {marketplace} Seller Center."
        )


class EmptySheetError(BisnisFlowError):
    def __init__(self, detail="File is empty or in the wrong format"):
        super().__init__(detail)


class CheckoutError(BisnisFlowError):
    pass
