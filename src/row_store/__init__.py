"""
Row Store - in-memory fixed-schema row store

A page-addressed table of fixed-width rows (id, username, email), fronted
by a small command interpreter and a REST API. Rows are appended into
lazily allocated 4KB pages and read back with a full scan.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"
