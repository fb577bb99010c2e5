from hashlib import sha256

from PySide6 import QtCore, QtGui

from .config import IMAGE_FORMAT

# Canonical pixel layout, resolution and PNG compressor setting used for fingerprints
CANONICAL_FORMAT = QtGui.QImage.Format.Format_ARGB32
CANONICAL_DOTS_PER_METER = 3780
PNG_QUALITY = -1


def encode_png(qimage: QtGui.QImage) -> bytes:
    ba = QtCore.QByteArray()
    buf = QtCore.QBuffer(ba)
    buf.open(QtCore.QIODevice.OpenModeFlag.WriteOnly)
    try:
        if not qimage.save(buf, IMAGE_FORMAT, PNG_QUALITY):
            raise ValueError("could not encode image as PNG")
    finally:
        buf.close()
    return bytes(ba)


def canonical_image(qimage: QtGui.QImage) -> QtGui.QImage:
    """Copy only the pixels of ``qimage`` into a fresh ARGB32 image.

    DPI and text keys of the source are not carried over, so they never
    reach the PNG encoding.
    """
    src = qimage.convertToFormat(CANONICAL_FORMAT)
    out = QtGui.QImage(src.width(), src.height(), CANONICAL_FORMAT)
    out.fill(0)
    p = QtGui.QPainter(out)
    try:
        p.setCompositionMode(QtGui.QPainter.CompositionMode.CompositionMode_Source)
        p.drawImage(0, 0, src)
    finally:
        p.end()
    out.setDotsPerMeterX(CANONICAL_DOTS_PER_METER)
    out.setDotsPerMeterY(CANONICAL_DOTS_PER_METER)
    return out


def compute_fingerprint(qimage: QtGui.QImage) -> str:
    """SHA-256 hex digest of the image re-encoded as canonical PNG.

    Copies of the same picture held as RGB32 and ARGB32, or carrying
    different metadata, hash identically.
    """
    return sha256(encode_png(canonical_image(qimage))).hexdigest()
