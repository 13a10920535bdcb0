#!/usr/bin/env python
#    xrdoctest/jsontest.py - test cases for xrdoc over JSON
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
import io, unittest
from datetime import datetime, timezone

import simplejson as json

from xrdoc import XrdDocument, InvalidInputType, MalformedDocument
from xrdoc.JSON import dumps, loads, dump, load, marshal, unmarshal
import xrdoctest

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

EXAMPLE_JSON = {
    "subject" : "http://example.tld/articles/11",
    "expires" : "2020-01-15T00:00:01Z",
    "aliases" : [ "http://example.tld/cool_article" ],
    "properties" : { "http://x.example.tld/ns/version" : "1.3" },
    "links" : [ { "rel" : "author", "type" : "text/html", "href" : "http://example.tld/authors/2" } ],
}

class XrdJSONTests ( xrdoctest.XrdTests, unittest.TestCase ) :
    def setUp ( self ) :
        self.dumps = dumps
        self.loads = loads

class JSONEncoderTests ( unittest.TestCase ) :
    def testExampleOutput ( self ) :
        """The example document is written as published, keys in order"""
        result = marshal( xrdoctest.example_document() )
        self.assertEqual( EXAMPLE_JSON, result )
        self.assertEqual( [ "subject", "expires", "aliases", "properties", "links" ], list( result ) )
        self.assertEqual( EXAMPLE_JSON, json.loads( dumps( xrdoctest.example_document() ) ) )

    def testUnsetFieldsOmitted ( self ) :
        """Unset fields are left out, not written as null or empty"""
        self.assertEqual( "{}", dumps( XrdDocument() ) )
        self.assertEqual( '{"subject": "x"}', dumps( XrdDocument( subject = "x" ) ) )

    def testEmptySubjectKept ( self ) :
        """An empty subject is still a subject in JSON"""
        self.assertEqual( { "subject" : "" }, marshal( XrdDocument( subject = "" ) ) )

    def testAliasesNotFiltered ( self ) :
        """Unlike XML, JSON writes aliases exactly as they are held"""
        doc = XrdDocument()
        for alias in ( "a", "", None, 42 ) :
            doc.append_alias( alias )
        self.assertEqual( [ "a", "", None, 42 ], marshal( doc )['aliases'] )
        self.assertEqual( { 'aliases' : [ "a", "", None, 42 ] }, loads( dumps( doc ) ) )

    def testLinkWhitelist ( self ) :
        """Only recognized link keys are written, in rel, type, href, template order"""
        doc = XrdDocument( links = [ { 'href' : "h", 'title' : "T", 'rel' : "r" } ] )
        links = marshal( doc )['links']
        self.assertEqual( [ { 'rel' : "r", 'href' : "h" } ], links )
        self.assertEqual( [ 'rel', 'href' ], list( links[0] ) )

    def testOddValues ( self ) :
        """Values JSON has no type for are written as text rather than failing"""
        stamp = datetime( 2020, 1, 15, 0, 0, 1, tzinfo = timezone.utc )
        doc = XrdDocument().set_property( "when", stamp ).set_property( "what", object )
        data = json.loads( dumps( doc ) )
        self.assertEqual( "2020-01-15T00:00:01Z", data['properties']['when'] )
        self.assertEqual( str( object ), data['properties']['what'] )

    def testOddKeys ( self ) :
        """Property keys JSON cannot use are written as text rather than failing"""
        doc = XrdDocument().set_property( ( "a", "b" ), "v" ).set_property( "t", "w" )
        data = json.loads( dumps( doc ) )
        self.assertEqual( { str( ( "a", "b" ) ) : "v", "t" : "w" }, data['properties'] )
        self.assertEqual( [ str( ( "a", "b" ) ), "t" ], list( marshal( doc )['properties'] ) )

    def testDumpsOptions ( self ) :
        """Keyword arguments are handed on to simplejson"""
        text = dumps( XrdDocument( subject = "x", aliases = [ "a" ] ), sort_keys = True, indent = 2 )
        self.assertEqual( '{\n  "aliases": [\n    "a"\n  ],\n  "subject": "x"\n}', text )

    def testDump ( self ) :
        """dump writes to a file that load reads back"""
        f = io.StringIO()
        dump( xrdoctest.example_document(), f )
        f.seek( 0 )
        self.assertEqual( xrdoctest.example_data(), load( f ) )

    def testToJson ( self ) :
        """XrdDocument.to_json is dumps"""
        doc = xrdoctest.example_document()
        self.assertEqual( dumps( doc ), doc.to_json() )

class JSONDecoderTests ( unittest.TestCase ) :
    def testExampleInput ( self ) :
        """The published example decodes to the example data"""
        self.assertEqual( xrdoctest.example_data(), loads( json.dumps( EXAMPLE_JSON ) ) )

    def testSubjectOnly ( self ) :
        """Only the keys that are present are decoded"""
        self.assertEqual( { 'subject' : "x" }, loads( '{"subject": "x"}' ) )

    def testNullsAbsent ( self ) :
        """A key holding null counts as not being there"""
        text = '{"subject": null, "aliases": null, "properties": null, "links": null}'
        self.assertEqual( {}, loads( text ) )

    def testNullExpires ( self ) :
        """A present expires is parsed even when it is null, and null is no timestamp"""
        self.assertRaises( MalformedDocument, loads, '{"subject": "x", "expires": null}' )

    def testEmptyCollectionsKept ( self ) :
        """Empty lists and objects that are present are decoded as they are"""
        self.assertEqual( { 'aliases' : [], 'properties' : {}, 'links' : [] }, loads( '{"aliases": [], "properties": {}, "links": []}' ) )

    def testVerbatimFields ( self ) :
        """Subject, aliases and properties are taken without checking"""
        text = '{"subject": 5, "aliases": ["", 1], "properties": {"t": null, "u": ""}}'
        self.assertEqual( { 'subject' : 5, 'aliases' : [ "", 1 ], 'properties' : { "t" : None, "u" : "" } }, loads( text ) )

    def testLinkWhitelist ( self ) :
        """Unknown link keys are dropped while decoding"""
        text = '{"links": [{"rel": "self", "titles": {"en": "Me"}, "href": "http://x", "properties": {}}, {}]}'
        self.assertEqual( { 'links' : [ { 'rel' : "self", 'href' : "http://x" }, {} ] }, loads( text ) )

    def testUnknownKeysIgnored ( self ) :
        """Keys outside the JRD are ignored"""
        self.assertEqual( { 'subject' : "x" }, loads( '{"subject": "x", "name": "y"}' ) )

    def testBadExpires ( self ) :
        """A present but unreadable expiration fails the whole document"""
        for value in ( '"2020-01-15"', '"tomorrow"', '""', '12', '[]' ) :
            self.assertRaises( MalformedDocument, loads, '{"subject": "x", "expires": %s}' % value )

    def testBadLinks ( self ) :
        """Links must be a list of objects"""
        for value in ( '{}', '"x"', '["x"]', '[[]]' ) :
            self.assertRaises( MalformedDocument, loads, '{"links": %s}' % value )

    def testNotAnObject ( self ) :
        """A JRD must be an object"""
        for text in ( '[]', '"x"', '1', 'null' ) :
            self.assertRaises( MalformedDocument, loads, text )

    def testNotJson ( self ) :
        """Text that is not JSON is rejected with a short message"""
        with self.assertRaises( MalformedDocument ) as ctx :
            loads( "not json" )
        message = str( ctx.exception )
        self.assertTrue( message.startswith( "Not a JRD document: JSONDecodeError: " ) )
        self.assertLessEqual( len( message.encode( 'utf-8' ) ), 256 )
        self.assertIsInstance( ctx.exception.__cause__, ValueError )

    def testDeepNesting ( self ) :
        """Pathologically nested input fails like any other bad input"""
        self.assertRaises( MalformedDocument, loads, "[" * 100000 + "]" * 100000 )

    def testNonStringInput ( self ) :
        """Bytes are not accepted by loads"""
        self.assertRaises( InvalidInputType, loads, b'{"subject": "x"}' )

    def testUnmarshal ( self ) :
        """unmarshal works on an already parsed object"""
        self.assertEqual( { 'subject' : "x" }, unmarshal( { "subject" : "x", "other" : 1 } ) )

if __name__ == "__main__":
    unittest.main()
