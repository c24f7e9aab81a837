"""PDF inspection service using PyMuPDF."""

import pymupdf  # PyMuPDF


class PDFProcessor:
    """Service for checking uploaded note files before they are stored."""

    @staticmethod
    async def inspect(pdf_bytes: bytes) -> dict:
        """
        Open PDF bytes and report basic facts about the document.

        Args:
            pdf_bytes: Raw bytes of the uploaded file

        Returns:
            Dictionary with:
                - valid: True if the bytes open as a PDF with at least one page
                - page_count: Number of pages (0 when invalid)
                - error: Error message when the file could not be opened (optional)

        Example:
            >>> result = await pdf_processor.inspect(data)
            >>> if result['valid']:
            ...     print(f"{result['page_count']} pages")
        """
        try:
            doc = pymupdf.open(stream=pdf_bytes, filetype="pdf")
            page_count = len(doc)
            doc.close()

            return {
                "valid": page_count > 0,
                "page_count": page_count,
            }
        except Exception as e:
            return {
                "valid": False,
                "page_count": 0,
                "error": str(e),
            }


# Singleton instance
pdf_processor = PDFProcessor()
