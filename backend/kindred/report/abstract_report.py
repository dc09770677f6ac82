"""
AbstractReport - base for PDF and HTML reports.

Holds the page geometry, document metadata and named text styles of a
report definition, and declares the factory methods a renderer implements
to create the report's elements.
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Union

from reportlab.lib.pagesizes import A0, A1, A2, A3, A4, LEGAL, LETTER, TABLOID
from reportlab.lib.units import inch, mm

from kindred import __version__
from kindred.core.config import settings
from kindred.core.exceptions import ReportError, UnknownPaperSizeError
from kindred.core.i18n import I18N
from kindred.core.logging_config import logger
from kindred.report.elements import (
    MediaFile,
    ReportBaseCell,
    ReportBaseElement,
    ReportBaseFootnote,
    ReportBaseHtml,
    ReportBaseImage,
    ReportBaseLine,
    ReportBasePageheader,
    ReportBaseText,
    ReportBaseTextbox,
)

Style = Dict[str, str]

# Header, page header, body, footer
PROCESSING_SECTIONS = ("H", "PH", "B", "F")


class AbstractReport(ABC):
    # Report layouts are measured in points
    UNITS = "pt"

    # A point is 1/72 of an inch
    INCH_TO_POINTS = inch
    MM_TO_POINTS = mm

    PAPER_SIZES: Dict[str, Tuple[float, float]] = {
        # ISO 216
        "A0": A0,
        "A1": A1,
        "A2": A2,
        "A3": A3,
        "A4": A4,
        # US
        "US-Letter": LETTER,
        "US-Legal": LEGAL,
        "US-Tabloid": TABLOID,
    }

    DEFAULT_PAPER_SIZE = "A4"

    def __init__(self):
        self.left_margin: float = 18.0 * self.MM_TO_POINTS
        self.right_margin: float = 18.0 * self.MM_TO_POINTS
        self.top_margin: float = 18.0 * self.MM_TO_POINTS
        self.bottom_margin: float = 18.0 * self.MM_TO_POINTS
        self.header_margin: float = 5.0 * self.MM_TO_POINTS
        self.footer_margin: float = 10.0 * self.MM_TO_POINTS

        # portrait or landscape
        self.orientation = "portrait"
        self.page_format = self.DEFAULT_PAPER_SIZE
        self.page_width = 0.0
        self.page_height = 0.0

        self.styles: Dict[str, Style] = {}
        self.default_font = "dejavusans"
        self.default_font_size = 12.0

        self.processing = "H"
        self.rtl = False

        self.show_generated_by = True
        self.generated_by = ""

        self.title = ""
        self.rauthor = f"{settings.APP_NAME} {__version__}"
        self.rkeywords = ""
        self.rsubject = ""

    @abstractmethod
    def clear_header(self) -> None:
        """Clear the header"""

    @abstractmethod
    def create_page_header(self) -> ReportBasePageheader:
        ...

    @abstractmethod
    def add_element(self, element: Union[ReportBaseElement, str]) -> None:
        """Add an element to the section being processed"""

    @abstractmethod
    def run(self):
        """Render the report"""

    @abstractmethod
    def create_cell(
        self,
        width: float,
        height: float,
        border: Union[int, str],
        align: str,
        bgcolor: str,
        style: str,
        ln: int,
        top,
        left,
        fill: int,
        stretch: int,
        bocolor: str,
        tcolor: str,
        reseth: bool,
    ) -> ReportBaseCell:
        """
        Create a new cell.

        width, height -- in points
        border        -- border style
        align         -- text alignment
        bgcolor       -- background colour code
        style         -- name of the text style
        ln            -- where the current position goes after the call
        top, left     -- position, or "." for the current one
        fill          -- 1 paints the background, 0 leaves it transparent
        stretch       -- character stretch mode
        bocolor       -- border colour
        tcolor        -- text colour
        reseth        -- reset the last cell height
        """

    @abstractmethod
    def create_text_box(
        self,
        width: float,
        height: float,
        border: bool,
        bgcolor: str,
        newline: bool,
        left: float,
        top: float,
        pagecheck: bool,
        style: str,
        fill: bool,
        padding: bool,
        reseth: bool,
    ) -> ReportBaseTextbox:
        ...

    @abstractmethod
    def create_text(self, style: str, color: str) -> ReportBaseText:
        ...

    @abstractmethod
    def create_html(self, tag: str, attrs: Dict[str, str]) -> ReportBaseHtml:
        ...

    @abstractmethod
    def create_line(self, x1: float, y1: float, x2: float, y2: float) -> ReportBaseLine:
        ...

    @abstractmethod
    def create_image(self, file: str, x: float, y: float, w: float, h: float, align: str, ln: str) -> ReportBaseImage:
        """
        Create an image from a file.

        align -- L, C, R, or empty to use x/y
        ln    -- T same line, N next line
        """

    @abstractmethod
    def create_image_from_object(
        self, media_file: MediaFile, x: float, y: float, w: float, h: float, align: str, ln: str
    ) -> ReportBaseImage:
        """Create an image from a media object; align and ln as for create_image"""

    @abstractmethod
    def create_footnote(self, style: str) -> ReportBaseFootnote:
        ...

    @classmethod
    def paper_size(cls, page_format: str) -> Tuple[float, float]:
        """(width, height) in points of a named paper size, portrait"""
        try:
            return cls.PAPER_SIZES[page_format]
        except KeyError:
            raise UnknownPaperSizeError(page_format)

    def setup(self) -> None:
        """
        Document-wide defaults inherited by the report sections.

        Without an explicit page size, the page format is used, A4 when the
        format is unknown. Landscape swaps width and height.
        """
        if I18N.direction() == "rtl":
            self.rtl = True

        self.rkeywords = ""

        # I18N: This is a report footer. %s is the name of the application.
        self.generated_by = I18N.translate("Generated by %s", f"{settings.APP_NAME} {__version__}")

        if self.page_width == 0 and self.page_height == 0:
            try:
                width, height = self.paper_size(self.page_format)
            except UnknownPaperSizeError as e:
                logger.warning(f"[Report] {e.message}, using {self.DEFAULT_PAPER_SIZE}")
                width, height = self.PAPER_SIZES[self.DEFAULT_PAPER_SIZE]

            if self.orientation == "landscape":
                width, height = height, width

            self.page_width, self.page_height = width, height

    def set_processing(self, p: str) -> None:
        """Header (H), page header (PH), body (B) or footer (F)"""
        if p not in PROCESSING_SECTIONS:
            raise ReportError(f"Unknown report section '{p}'")
        self.processing = p

    def add_title(self, data: str) -> None:
        """Append character data found in the title"""
        self.title += data

    def add_description(self, data: str) -> None:
        """Append character data found in the description"""
        self.rsubject += data

    def add_style(self, style: Style) -> None:
        self.styles[style["name"]] = style

    def get_style(self, s: str) -> Style:
        """A named style; the first style defined stands in for unknown names"""
        if s in self.styles:
            return self.styles[s]
        if not self.styles:
            raise ReportError(f"No style '{s}' and no styles are defined")
        return next(iter(self.styles.values()))
