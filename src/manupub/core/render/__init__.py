"""markdown-it token passes and plain-text extraction"""
