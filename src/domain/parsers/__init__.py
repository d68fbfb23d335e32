"""Pure text processing: scanning, transformation."""
