# thumbgallery/models/gallery_model.py
from typing import List, Optional

from pydantic import BaseModel, Field

from ..enums import EntryKind


class GalleryEntry(BaseModel):
    """One file or sub-directory in a gallery listing"""

    name: str = Field(..., description="Entry name within its directory")
    kind: EntryKind
    original: str = Field(
        ..., description="URL of the original file, or gallery URL of a directory"
    )
    thumbnail: str = Field(
        ..., description="URL of the generated thumbnail or the folder placeholder"
    )


class GalleryListing(BaseModel):
    """Contents of one directory under the image root"""

    path: str = Field(..., description="Directory path relative to the image root")
    parent: Optional[str] = Field(
        default=None, description="Gallery URL of the parent directory"
    )
    images: List[GalleryEntry] = Field(default_factory=list)
