#    xrdoc/XML.py - XRD (XML) encoding for xrdoc documents.
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
r"""xrdoc/XML.py reads and writes descriptors as XRD 1.0 documents.  It provides
functions similar to those found in :mod:`pickle` or :mod:`json` but the representation
used is XML.

Input is parsed with :mod:`defusedxml`, so entity declarations and external references
are refused rather than expanded.  Output is written with ElementTree.

The XML elements used in the representation are (all in the XRD 1.0 namespace):

    <XRD xmlns='http://docs.oasis-open.org/ns/xri/xrd-1.0'>...</XRD> - the document root.
        contains the elements below, in this order when written.

    <Expires>2020-01-15T00:00:01Z</Expires> - the expiration time, always UTC.

    <Subject>...</Subject> - the subject identifier.

    <Alias>...</Alias> - one per alias.

    <Property type='...'>...</Property> - one per property.
        ``type`` - the property type URI.  An element without content is a property
        with no value (``None``).

    <Link rel='...' type='...' href='...' template='...'/> - one per link.
        only the attributes present on the link are written; other attributes found
        on input are ignored.

Elements other than these, and elements outside the namespace, are ignored on input.
"""
import logging
from datetime import datetime
import xml.etree.ElementTree as ET

import defusedxml.ElementTree as SafeET
from defusedxml import DefusedXmlException

from xrdoc import XMLNS, InvalidInputType, MalformedDocument, NotAnXrdDocument
from xrdoc import link_record, parse_datetime, format_datetime

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'marshal', 'unmarshal', 'dumps', 'dump', 'loads', 'load' ]

logger = logging.getLogger( __name__ )

NS = { 'xrd' : XMLNS }

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

def marshal ( doc ) :
    r"""Prepares the document ``doc`` for expression as XML output.  Element names are
    qualified with the XRD namespace, so the tree can be handed straight to
    :func:`unmarshal`."""
    root = ET.Element( _tag( 'XRD' ) )
    for encoder in encoders :
        encoder( root, doc )
    return ET.ElementTree( root )

def unmarshal ( xmldoc ) :
    r"""Extracts the descriptor data from the parsed XML ``xmldoc`` (an ElementTree or its
    root Element) into a dict."""
    root = xmldoc.getroot() if isinstance( xmldoc, ET.ElementTree ) else xmldoc
    if root is None or _local_name( root.tag ) != 'XRD' :
        logger.debug( "rejecting document with root %r", None if root is None else root.tag )
        raise NotAnXrdDocument( "Not an XRD document" )
    data = {}
    for decoder in decoders :
        decoder( root, data )
    return data

def dumps ( doc, pretty_print = True, xml_declaration = True ) :
    r"""Dump the document ``doc`` as XML which is returned as a string."""
    root = _writable( marshal( doc ), pretty_print )
    text = ET.tostring( root, encoding = 'unicode' )
    if pretty_print :
        text += "\n"
    if xml_declaration :
        text = XML_DECLARATION + text
    return text

def dump ( doc, f, pretty_print = True ) :
    r"""Dump the document ``doc`` as UTF-8 encoded XML which is written to the file-like
    object ``f`` (which has a .write method accepting bytes) or to the file named ``f``."""
    root = _writable( marshal( doc ), pretty_print )
    ET.ElementTree( root ).write( f, encoding = 'UTF-8', xml_declaration = True )

def loads ( s ) :
    r"""Convert the XML string ``s`` into a dict of descriptor data."""
    if not isinstance( s, str ) :
        raise InvalidInputType( "expected an XML string, got %s" % type( s ).__name__ )
    return unmarshal( _parse( SafeET.fromstring, s ) )

def load ( f ) :
    r"""Read an XML document from the file-like object ``f`` (or the file named ``f``) and
    convert it into a dict of descriptor data."""
    return unmarshal( _parse( SafeET.parse, f ) )

def _parse ( parser, source ) :
    try :
        return parser( source )
    except ( ET.ParseError, DefusedXmlException, UnicodeError ) as ex :
        logger.debug( "rejecting malformed XML: %s", ex )
        raise MalformedDocument( "Not an XRD document: %s: %s" % ( type( ex ).__name__, ex ) ) from ex

def _writable ( tree, pretty_print ) :
    # ElementTree refuses default_namespace alongside unqualified attributes; the
    # namespace goes out as the xmlns attribute of an unqualified copy instead.
    root = _unqualified( tree.getroot() )
    root.set( 'xmlns', XMLNS )
    if pretty_print :
        ET.indent( root )
    return root

def _unqualified ( element ) :
    out = ET.Element( _local_name( element.tag ), element.attrib )
    out.text = element.text
    out.tail = element.tail
    out.extend( _unqualified( child ) for child in element )
    return out

def _tag ( name ) :
    return "{%s}%s" % ( XMLNS, name )

def _local_name ( tag ) :
    return tag.rpartition( '}' )[2] if isinstance( tag, str ) else None

def _content ( element ) :
    return "".join( element.itertext() )

def encode_expires ( parent, doc ) :
    if isinstance( doc.expires, datetime ) :
        ET.SubElement( parent, _tag( 'Expires' ) ).text = format_datetime( doc.expires )

def encode_subject ( parent, doc ) :
    if doc.subject is not None and str( doc.subject ) :
        ET.SubElement( parent, _tag( 'Subject' ) ).text = str( doc.subject )

def encode_aliases ( parent, doc ) :
    for alias in doc.aliases or () :
        if not isinstance( alias, str ) or not alias :
            logger.debug( "skipping alias %r", alias )
            continue
        ET.SubElement( parent, _tag( 'Alias' ) ).text = alias

def encode_properties ( parent, doc ) :
    for key, value in ( doc.properties or {} ).items() :
        e = ET.SubElement( parent, _tag( 'Property' ) )
        if key is not None :
            e.set( 'type', str( key ) )
        if value is not None :
            e.text = str( value )

def encode_links ( parent, doc ) :
    for link in doc.links or () :
        e = ET.SubElement( parent, _tag( 'Link' ) )
        for attr, value in link_record( link ).items() :
            if value is not None :
                e.set( attr, str( value ) )

encoders = ( encode_expires, encode_subject, encode_aliases, encode_properties, encode_links )

def decode_expires ( root, data ) :
    e = root.find( 'xrd:Expires', NS )
    if e is not None :
        data['expires'] = parse_datetime( _content( e ) )

def decode_subject ( root, data ) :
    e = root.find( 'xrd:Subject', NS )
    if e is not None :
        data['subject'] = _content( e )

def decode_aliases ( root, data ) :
    aliases = [ _content( e ) for e in root.findall( 'xrd:Alias', NS ) ]
    if aliases :
        data['aliases'] = aliases

def decode_properties ( root, data ) :
    properties = {}
    for e in root.findall( 'xrd:Property', NS ) :
        # no child content at all means "no value", not an empty one.
        has_content = e.text is not None or len( e ) > 0
        properties[e.get( 'type' )] = _content( e ) if has_content else None
    if properties :
        data['properties'] = properties

def decode_links ( root, data ) :
    links = [ link_record( e.attrib ) for e in root.findall( 'xrd:Link', NS ) ]
    if links :
        data['links'] = links

decoders = ( decode_expires, decode_subject, decode_aliases, decode_properties, decode_links )
