#    xrdoc/JSON.py - JRD (JSON) encoding for xrdoc documents.
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
r"""xrdoc/JSON.py is a wrapper around :mod:`simplejson` that reads and writes descriptors
as JRD (JSON Resource Descriptor, see RFC 6415 Appendix A) documents.

The public interface should be very familiar to anyone who has used the :mod:`json`,
:mod:`pickle` or mod:`marshal` modules.

A JRD is a single JSON object.  Its keys mirror the XRD elements:

    - ``subject`` - the subject identifier
    - ``expires`` - the expiration time, formatted as ``2020-01-15T00:00:01Z``
    - ``aliases`` - a list of alias identifiers
    - ``properties`` - an object mapping property type URIs to values (or ``null``)
    - ``links`` - a list of objects with ``rel``, ``type``, ``href`` and ``template`` keys

Keys are only written for fields that are set.  On input, link keys other than the four
above are dropped; everything else is taken as it is found.

Unlike the XML encoding, aliases are written exactly as they are held in the document,
including empty or non-string entries.
"""
import logging
from datetime import datetime

import simplejson as json

from xrdoc import InvalidInputType, MalformedDocument
from xrdoc import link_record, parse_datetime, format_datetime

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'marshal', 'unmarshal', 'dumps', 'dump', 'loads', 'load' ]

logger = logging.getLogger( __name__ )

def marshal ( doc ) :
    r"""Prepares the document ``doc`` for expression as JSON output, returning the JRD
    object as a dict."""
    out = {}
    for key, encoder in encoders :
        value = encoder( doc )
        if value is not None :
            out[key] = value
    return out

def unmarshal ( o ) :
    r"""Extracts the descriptor data from a parsed JRD object ``o`` into a dict."""
    if not isinstance( o, dict ) :
        logger.debug( "rejecting JRD of type %s", type( o ).__name__ )
        raise MalformedDocument( "Not a JRD document: expected an object, got %s" % type( o ).__name__ )
    data = {}
    for key, decoder in decoders :
        # a present expires is always parsed, even when it is null.
        if o.get( key ) is not None or ( key == 'expires' and key in o ) :
            data[key] = decoder( o[key] )
    return data

def dumps ( doc, **kwargs ) :
    r"""Dump the document ``doc`` as a JSON string which is returned.  The keyword arguments
    are the same as those accepted by the ``dumps`` function in :mod:`simplejson`, with the
    exception of the ``default`` argument which is used to write values JSON has no type
    for."""
    return json.dumps( marshal( doc ), default = _jrd_default, **kwargs )

def dump ( doc, f, **kwargs ) :
    r"""Dump the document ``doc`` as a JSON expression which is written to the passed
    file-like object ``f`` (i.e. has a .write method).  The keyword arguments are the same
    as those accepted by :func:`dumps`."""
    json.dump( marshal( doc ), f, default = _jrd_default, **kwargs )

def loads ( s, **kwargs ) :
    r"""Convert the JSON string ``s`` into a dict of descriptor data.  The keyword arguments
    accepted are the same as those accepted by the ``loads`` function in :mod:`simplejson`."""
    if not isinstance( s, str ) :
        raise InvalidInputType( "expected a JSON string, got %s" % type( s ).__name__ )
    return unmarshal( _parse( json.loads, s, **kwargs ) )

def load ( f, **kwargs ) :
    r"""Read a JSON document from the file-like object ``f`` (which has a .read method) and
    convert it into a dict of descriptor data.  The keyword arguments accepted are the same
    as those accepted by the ``load`` function in :mod:`simplejson`."""
    return unmarshal( _parse( json.load, f, **kwargs ) )

def _parse ( parser, source, **kwargs ) :
    try :
        return parser( source, **kwargs )
    except ( ValueError, RecursionError ) as ex :
        logger.debug( "rejecting malformed JSON: %s", ex )
        raise MalformedDocument( "Not a JRD document: %s: %s" % ( type( ex ).__name__, ex ) ) from ex

def _jrd_default ( obj ) :
    if isinstance( obj, datetime ) :
        return format_datetime( obj )
    return str( obj )

def encode_expires ( doc ) :
    if isinstance( doc.expires, datetime ) :
        return format_datetime( doc.expires )

def encode_aliases ( doc ) :
    if doc.aliases :
        return list( doc.aliases )

def encode_properties ( doc ) :
    if doc.properties :
        return dict( ( _jrd_key( key ), value ) for key, value in doc.properties.items() )

def _jrd_key ( key ) :
    if key is None or isinstance( key, ( str, int, float, bool ) ) :
        return key
    return str( key )

def encode_links ( doc ) :
    if doc.links :
        return [ link_record( link ) for link in doc.links ]

encoders = ( ( 'subject', lambda doc : doc.subject ), ( 'expires', encode_expires ), ( 'aliases', encode_aliases )
    , ( 'properties', encode_properties ), ( 'links', encode_links ) )

def decode_links ( links ) :
    if not isinstance( links, list ) :
        raise MalformedDocument( "Not a JRD document: links must be a list, got %s" % type( links ).__name__ )
    out = []
    for link in links :
        if not isinstance( link, dict ) :
            raise MalformedDocument( "Not a JRD document: link must be an object, got %s" % type( link ).__name__ )
        out.append( link_record( link ) )
    return out

def _verbatim ( value ) :
    return value

decoders = ( ( 'subject', _verbatim ), ( 'expires', parse_datetime ), ( 'aliases', _verbatim )
    , ( 'properties', _verbatim ), ( 'links', decode_links ) )
