"""
Sample programs for the PDF Services API.

Each module is runnable on its own:

    python -m samples.compress_pdf --input path/to/file.pdf
"""
