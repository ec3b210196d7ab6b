"""Smart mouse: find on-screen UI elements by text and drive the pointer.

Screenshots are analyzed with OpenCV region detectors and Tesseract OCR, the
detections are fused into one element list, and a fuzzy matcher resolves a
free-text query to the element to act on.
"""

__version__ = "0.1.0"
