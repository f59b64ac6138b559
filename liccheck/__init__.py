"""Read, verify and merge signed software licences bound to hardware identifiers."""

__version__ = "2.1.0"