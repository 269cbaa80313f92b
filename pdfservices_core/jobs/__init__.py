"""
Job models for PDF Services operations.

Usage:
    from pdfservices_core.jobs import CompressPDFJob, CompressionLevel

    job = CompressPDFJob(input=asset, compression_level=CompressionLevel.HIGH)
    handle = await client.submit(job)
"""

from .operations import (
    AutotagPDFJob,
    CombineInput,
    CombinePDFJob,
    CompressPDFJob,
    CreatePDFJob,
    DeletePagesJob,
    DocumentMergeJob,
    ElectronicSealJob,
    ExportPDFJob,
    ExportPDFToImagesJob,
    ExtractPDFJob,
    HTMLToPDFJob,
    ImportPDFFormDataJob,
    InsertPagesJob,
    LinearizePDFJob,
    OCRPDFJob,
    PageInsertion,
    PageRotation,
    PDFAccessibilityCheckerJob,
    PDFPropertiesJob,
    PDFServicesJob,
    PDFWatermarkJob,
    ProtectPDFJob,
    RemoveProtectionJob,
    ReplacePagesJob,
    RotatePagesJob,
    SplitPDFJob,
)
from .params import (
    Angle,
    AppearanceItem,
    AppearanceOptions,
    CompressionLevel,
    ContentEncryption,
    CSCAuthContext,
    CSCCredentials,
    EncryptionAlgorithm,
    ExportPDFTargetFormat,
    ExportPDFToImagesOutputType,
    ExportPDFToImagesTargetFormat,
    ExtractElementType,
    ExtractRenditionsElementType,
    FieldLocation,
    FieldOptions,
    OCRSupportedType,
    OutputFormat,
    PageLayout,
    PageRange,
    PageRanges,
    Permission,
    SignatureFormat,
    TableStructureType,
)

__all__ = [
    "Angle",
    "AppearanceItem",
    "AppearanceOptions",
    "AutotagPDFJob",
    "CSCAuthContext",
    "CSCCredentials",
    "CombineInput",
    "CombinePDFJob",
    "CompressPDFJob",
    "CompressionLevel",
    "ContentEncryption",
    "CreatePDFJob",
    "DeletePagesJob",
    "DocumentMergeJob",
    "ElectronicSealJob",
    "EncryptionAlgorithm",
    "ExportPDFJob",
    "ExportPDFTargetFormat",
    "ExportPDFToImagesJob",
    "ExportPDFToImagesOutputType",
    "ExportPDFToImagesTargetFormat",
    "ExtractElementType",
    "ExtractPDFJob",
    "ExtractRenditionsElementType",
    "FieldLocation",
    "FieldOptions",
    "HTMLToPDFJob",
    "ImportPDFFormDataJob",
    "InsertPagesJob",
    "LinearizePDFJob",
    "OCRPDFJob",
    "OCRSupportedType",
    "OutputFormat",
    "PDFAccessibilityCheckerJob",
    "PDFPropertiesJob",
    "PDFServicesJob",
    "PDFWatermarkJob",
    "PageInsertion",
    "PageLayout",
    "PageRange",
    "PageRanges",
    "PageRotation",
    "Permission",
    "ProtectPDFJob",
    "RemoveProtectionJob",
    "ReplacePagesJob",
    "RotatePagesJob",
    "SignatureFormat",
    "SplitPDFJob",
    "TableStructureType",
]
