"""
Report elements.

These are what the factory methods of a report return. They hold the
layout attributes read from the report definition; PDF and HTML renderers
subclass them and add drawing. All sizes are in points.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Union


@dataclass
class ReportBaseElement:
    """Base for elements that carry text"""
    text: str = ""

    def add_text(self, text: str) -> None:
        self.text += text.replace("\t", " ")

    def add_newline(self) -> None:
        self.text += "\n"

    def get_value(self) -> str:
        return self.text

    def set_text(self, text: str) -> None:
        self.text = text


@dataclass
class ReportBaseCell(ReportBaseElement):
    """
    A box with text.

    ln: where the current position goes afterwards
        0 to the right, 1 to the start of the next line, 2 below
    border: 0/1, or a combination of L, T, R, B
    stretch: 0 none, 1 scale if needed, 2 always scale,
             3 space if needed, 4 always space
    """
    width: float = 0.0
    height: float = 0.0
    border: Union[int, str] = 0
    align: str = ""
    bgcolor: str = ""
    style: str = ""
    ln: int = 0
    top: Optional[float] = None
    left: Optional[float] = None
    fill: int = 1
    stretch: int = 0
    bocolor: str = ""
    tcolor: str = ""
    reseth: bool = False
    url: str = ""

    def set_url(self, url: str) -> None:
        self.url = url


@dataclass
class ReportBaseTextbox(ReportBaseElement):
    """A box that lays out other elements inside it"""
    width: float = 0.0
    height: float = 0.0
    border: bool = False
    bgcolor: str = ""
    newline: bool = False
    left: float = 0.0
    top: float = 0.0
    pagecheck: bool = True
    style: str = ""
    fill: bool = False
    padding: bool = True
    reseth: bool = False
    elements: List[Union[ReportBaseElement, str]] = field(default_factory=list)

    def add_element(self, element: Union[ReportBaseElement, str]) -> None:
        self.elements.append(element)


@dataclass
class ReportBaseText(ReportBaseElement):
    style: str = ""
    color: str = ""


@dataclass
class ReportBaseHtml(ReportBaseElement):
    """An HTML tag with its attributes and child elements"""
    tag: str = ""
    attrs: Dict[str, str] = field(default_factory=dict)
    elements: List[Union[ReportBaseElement, str]] = field(default_factory=list)

    def add_element(self, element: Union[ReportBaseElement, str]) -> None:
        self.elements.append(element)

    def get_start(self) -> str:
        attrs = "".join(f' {key}="{value}"' for key, value in self.attrs.items())
        return f"<{self.tag}{attrs}>"

    def get_end(self) -> str:
        return f"</{self.tag}>"


@dataclass
class ReportBaseLine(ReportBaseElement):
    """A straight line; a coordinate of None means the current position"""
    x1: Optional[float] = None
    y1: Optional[float] = None
    x2: Optional[float] = None
    y2: Optional[float] = None


@dataclass
class ReportBaseImage(ReportBaseElement):
    """
    align: L, C, R, or empty to use x/y
    line:  T same line, N next line
    """
    file: str = ""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    align: str = ""
    line: str = ""


@dataclass
class ReportBaseFootnote(ReportBaseElement):
    style: str = ""
    num: int = 0
    num_text: str = ""

    def set_num(self, num: int) -> None:
        self.num = num
        self.num_text = str(num)


@dataclass
class ReportBasePageheader(ReportBaseElement):
    elements: List[Union[ReportBaseElement, str]] = field(default_factory=list)

    def add_element(self, element: Union[ReportBaseElement, str]) -> None:
        self.elements.append(element)


@dataclass
class MediaFile:
    """A file attached to a media object, as used for report images"""
    filename: str
    folder: str = ""
    mime_type: str = ""
    title: str = ""

    @property
    def path(self) -> str:
        return str(PurePosixPath(self.folder) / self.filename) if self.folder else self.filename

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")
