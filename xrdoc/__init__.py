#    xrdoc/__init__.py - XRD/JRD resource descriptor documents
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""XRDOC is a small library for reading and writing resource descriptor documents as
they are used by web-based discovery protocols (host-meta, WebFinger).  A descriptor
describes one resource (its ``subject``) and carries:

 - an expiration timestamp (``expires``);
 - the subject identifier (``subject``);
 - alternate identifiers for the same resource (``aliases``);
 - typed properties, keyed by a type URI, each with an optional value (``properties``);
 - typed links to other resources (``links``), each described by up to four
   attributes: ``rel``, ``type``, ``href`` and ``template``.

The same document can be expressed in two equivalent encodings.  :mod:`xrdoc.XML`
reads and writes XRD (Extensible Resource Descriptor, XML) using ElementTree;
:mod:`xrdoc.JSON` reads and writes JRD (JSON Resource Descriptor, RFC 6415 Appendix A)
using :mod:`simplejson`.  Each of the modules provides an interface that users of
:mod:`pickle` or :mod:`json` should find familiar (dump, dumps, load, loads).

Documents are built with an :class:`XrdDocument`.  Its setters accept anything; checking
values is left to the encoders, which quietly leave out what they cannot express::

    doc = XrdDocument()
    doc.set_expires( datetime( 2020, 1, 15, 0, 0, 1, tzinfo = timezone.utc ) )
    doc.set_subject( "http://example.tld/articles/11" )
    doc.append_alias( "http://example.tld/cool_article" )
    doc.set_property( "http://x.example.tld/ns/version", "1.3" )
    doc.append_link( { 'rel' : "author", 'type' : "text/html", 'href' : "http://example.tld/authors/2" } )
    doc.to_xml()

Decoding goes the other way and returns a plain dict holding only the fields found in the
input (``expires``, ``subject``, ``aliases``, ``properties``, ``links``).  Both decoders
return the same shape, so a decoded XRD compares equal to the decoded JRD of the same
document.  :meth:`XrdDocument.from_data` turns such a dict back into a document.

Decoding failures raise one of the :class:`XrdError` subclasses; encoding never fails.
"""
from collections.abc import Mapping
from datetime import datetime, timezone
import logging, sys

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'XMLNS', 'LINK_ATTRS', 'DATETIME_FORMAT', 'MAX_MESSAGE_BYTES'
    , 'XrdError', 'InvalidInputType', 'MalformedDocument', 'NotAnXrdDocument'
    , 'XrdDocument', 'link_record', 'parse_datetime', 'format_datetime', 'bounded_message' ]

logger = logging.getLogger( __name__ )

# xml namespace of XRD 1.0 documents.
XMLNS = "http://docs.oasis-open.org/ns/xri/xrd-1.0"

# the only link attributes that are recognized, in the order they are written.
LINK_ATTRS = ( 'rel', 'type', 'href', 'template' )

# format of the Expires element / expires key.
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

MAX_MESSAGE_BYTES = 256

def bounded_message ( message, limit = MAX_MESSAGE_BYTES ) :
    r"""Return ``message`` as text that encodes to at most ``limit`` bytes in the
    interpreter's default encoding.  Characters that cannot be encoded are replaced, and a
    character cut in half by the limit is dropped."""
    encoding = sys.getdefaultencoding()
    data = str( message ).encode( encoding, 'replace' )[:limit]
    return data.decode( encoding, 'ignore' )

class XrdError ( Exception ) :
    r"""Base class of all errors raised while decoding a descriptor."""

class InvalidInputType ( XrdError, TypeError ) :
    r"""A decoder was handed something other than text."""

class MalformedDocument ( XrdError, ValueError ) :
    r"""The input is not well-formed, or one of its fields cannot be read.  The message
    is always bounded (see :func:`bounded_message`)."""
    def __init__ ( self, message ) :
        super().__init__( bounded_message( message ) )

class NotAnXrdDocument ( MalformedDocument ) :
    r"""Well-formed XML whose root element is missing or is not ``XRD``."""

def parse_datetime ( value ) :
    r"""Parse an ``expires`` value into a UTC datetime.  Anything that does not match
    :data:`DATETIME_FORMAT` raises :class:`MalformedDocument`."""
    try :
        return datetime.strptime( value, DATETIME_FORMAT ).replace( tzinfo = timezone.utc )
    except ( TypeError, ValueError ) as ex :
        logger.debug( "rejecting expiration value %r", value )
        raise MalformedDocument( "invalid expiration %r: %s" % ( value, ex ) ) from ex

def format_datetime ( value ) :
    # naive datetimes are taken to be UTC already.
    if value.tzinfo is not None and value.utcoffset() is not None :
        value = value.astimezone( timezone.utc )
    return value.strftime( DATETIME_FORMAT )

def link_record ( link ) :
    r"""Project ``link`` onto the recognized link attributes, keeping only those present
    (in :data:`LINK_ATTRS` order).  Anything that is not a mapping projects to an empty
    record."""
    if not isinstance( link, Mapping ) :
        return {}
    return dict( ( attr, link[attr] ) for attr in LINK_ATTRS if attr in link )

class XrdDocument ( object ) :
    r"""An XRD/JRD document being assembled for output.

    All five fields may be left unset: ``expires`` and ``subject`` are then ``None`` and
    the collections are empty.  A property value of ``None`` means the property is present
    without content, which is not the same as an empty string.

    Nothing here validates.  Setters store what they are given and the encoders decide
    what can be written (an empty alias is kept in the document but never becomes an
    ``<Alias>`` element)."""
    __slots__ = ( 'expires', 'subject', 'aliases', 'properties', 'links' )

    def __init__ ( self, **kwargs ) :
        self.expires = None
        self.subject = None
        self.aliases = []
        self.properties = {}
        self.links = []
        for k, v in kwargs.items() :
            setattr( self, k, v )

    def set_expires ( self, value ) :
        self.expires = value
        return self

    def set_subject ( self, value ) :
        self.subject = value
        return self

    def append_alias ( self, value ) :
        self.aliases.append( value )
        return self

    def set_property ( self, key, value = None ) :
        self.properties[key] = value
        return self

    def append_link ( self, link ) :
        r"""Add a link.  Only the ``rel``, ``type``, ``href`` and ``template`` entries of
        ``link`` are kept."""
        self.links.append( link_record( link ) )
        return self

    @classmethod
    def from_data ( cls, data ) :
        r"""Build a document from the dict returned by :func:`xrdoc.XML.loads` or
        :func:`xrdoc.JSON.loads`.  Aliases that are not a list and properties that are not
        a mapping are left out."""
        doc = cls()
        if 'expires' in data :
            doc.set_expires( data['expires'] )
        if 'subject' in data :
            doc.set_subject( data['subject'] )
        aliases = data.get( 'aliases' )
        for alias in aliases if isinstance( aliases, ( list, tuple ) ) else () :
            doc.append_alias( alias )
        properties = data.get( 'properties' )
        for key, value in properties.items() if isinstance( properties, Mapping ) else () :
            doc.set_property( key, value )
        for link in data.get( 'links' ) or () :
            doc.append_link( link )
        return doc

    def to_xml ( self, **options ) :
        r"""Shortcut for :func:`xrdoc.XML.dumps`."""
        from xrdoc import XML
        return XML.dumps( self, **options )

    def to_json ( self, **options ) :
        r"""Shortcut for :func:`xrdoc.JSON.dumps`."""
        from xrdoc import JSON
        return JSON.dumps( self, **options )

    def __eq__ ( self, other ) :
        if not isinstance( other, XrdDocument ) :
            return NotImplemented
        return all( getattr( self, slot ) == getattr( other, slot ) for slot in self.__slots__ )

    __hash__ = None

    def __repr__ ( self ) :
        return "<XrdDocument:" + ",".join( slot + "=" + repr( getattr( self, slot ) ) for slot in self.__slots__ if getattr( self, slot ) not in ( None, [], {} ) ) + ">"
