#!/usr/bin/env python
#    xrdoctest/modeltest.py - test cases for the xrdoc document model
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
import unittest
from datetime import datetime, timedelta, timezone

import xrdoc
from xrdoc import XrdDocument, MalformedDocument, NotAnXrdDocument, InvalidInputType
from xrdoc import link_record, parse_datetime, format_datetime, bounded_message
import xrdoctest

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

class DocumentTests ( unittest.TestCase ) :
    def testDefaults ( self ) :
        """A new document has nothing set"""
        doc = XrdDocument()
        self.assertIsNone( doc.expires )
        self.assertIsNone( doc.subject )
        self.assertEqual( [], doc.aliases )
        self.assertEqual( {}, doc.properties )
        self.assertEqual( [], doc.links )

    def testCollectionsNotShared ( self ) :
        """Each document has its own collections"""
        a, b = XrdDocument(), XrdDocument()
        a.append_alias( "x" ).set_property( "t" ).append_link( {} )
        self.assertEqual( XrdDocument(), b )

    def testSettersArePermissive ( self ) :
        """Setters store whatever they are given"""
        doc = XrdDocument()
        doc.set_expires( "soon" ).set_subject( 42 ).append_alias( "" ).append_alias( None )
        self.assertEqual( "soon", doc.expires )
        self.assertEqual( 42, doc.subject )
        self.assertEqual( [ "", None ], doc.aliases )

    def testPropertyValues ( self ) :
        """No value and an empty value are different, and the last write wins"""
        doc = XrdDocument()
        doc.set_property( "a" ).set_property( "b", "" ).set_property( "a", "1" ).set_property( "c" )
        self.assertEqual( { "a" : "1", "b" : "", "c" : None }, doc.properties )
        self.assertEqual( [ "a", "b", "c" ], list( doc.properties ) )

    def testAppendLinkWhitelist ( self ) :
        """Only recognized link keys are stored"""
        doc = XrdDocument()
        doc.append_link( { 'title' : "T", 'href' : "h", 'rel' : "r" } ).append_link( {} )
        self.assertEqual( [ { 'rel' : "r", 'href' : "h" }, {} ], doc.links )

    def testAppendLinkCopies ( self ) :
        """The stored link is a copy of the one passed in"""
        link = { 'rel' : "r" }
        doc = XrdDocument().append_link( link )
        link['rel'] = "changed"
        self.assertEqual( [ { 'rel' : "r" } ], doc.links )

    def testKeywordConstruction ( self ) :
        """Fields may be given to the constructor"""
        doc = XrdDocument( subject = "s", aliases = [ "a" ] )
        self.assertEqual( XrdDocument().set_subject( "s" ).append_alias( "a" ), doc )
        self.assertRaises( AttributeError, XrdDocument, title = "t" )

    def testFromData ( self ) :
        """A decoded dict builds the document it came from"""
        self.assertEqual( xrdoctest.example_document(), XrdDocument.from_data( xrdoctest.example_data() ) )
        self.assertEqual( XrdDocument(), XrdDocument.from_data( {} ) )

    def testFromDataOddShapes ( self ) :
        """Aliases and properties that are not a list and a mapping are left out"""
        from xrdoc import JSON
        doc = XrdDocument.from_data( JSON.loads( '{"subject": "s", "aliases": "a", "properties": [1]}' ) )
        self.assertEqual( XrdDocument( subject = "s" ), doc )

    def testEquality ( self ) :
        """Documents compare by content"""
        self.assertEqual( xrdoctest.example_document(), xrdoctest.example_document() )
        self.assertNotEqual( xrdoctest.example_document(), XrdDocument() )
        self.assertNotEqual( XrdDocument(), {} )

    def testRepr ( self ) :
        """repr shows the fields that are set"""
        self.assertEqual( "<XrdDocument:subject='s'>", repr( XrdDocument( subject = "s" ) ) )

class HelperTests ( unittest.TestCase ) :
    def testLinkRecord ( self ) :
        """Links are projected onto rel, type, href, template in that order"""
        record = link_record( { 'template' : "t", 'x' : 1, 'rel' : None } )
        self.assertEqual( { 'rel' : None, 'template' : "t" }, record )
        self.assertEqual( [ 'rel', 'template' ], list( record ) )
        self.assertEqual( {}, link_record( "rel" ) )
        self.assertEqual( {}, link_record( None ) )

    def testParseDatetime ( self ) :
        """Timestamps are read as UTC"""
        self.assertEqual( datetime( 2020, 1, 15, 0, 0, 1, tzinfo = timezone.utc ), parse_datetime( "2020-01-15T00:00:01Z" ) )
        for value in ( "2020-01-15T00:00:01", "2020-01-15T00:00:01.5Z", None, 1 ) :
            self.assertRaises( MalformedDocument, parse_datetime, value )

    def testFormatDatetime ( self ) :
        """Timestamps are written in UTC without fractions"""
        self.assertEqual( "2020-01-15T00:00:01Z", format_datetime( datetime( 2020, 1, 15, 0, 0, 1, 500 ) ) )
        self.assertEqual( "2020-01-14T23:00:01Z", format_datetime( datetime( 2020, 1, 15, 0, 0, 1, tzinfo = timezone( timedelta( hours = 1 ) ) ) ) )

    def testBoundedMessage ( self ) :
        """Messages are cut to 256 bytes without splitting characters"""
        self.assertEqual( "short", bounded_message( "short" ) )
        self.assertEqual( "x" * 256, bounded_message( "x" * 1000 ) )
        cut = bounded_message( "é" * 200 )
        self.assertEqual( "é" * 128, cut )
        cut = bounded_message( "x" + "é" * 200 )
        self.assertEqual( 255, len( cut.encode( 'utf-8' ) ) )

    def testBoundedMessageReplaces ( self ) :
        """Characters the default encoding cannot hold are replaced"""
        self.assertEqual( "a?b", bounded_message( "a\ud800b" ) )

    def testMalformedDocumentMessage ( self ) :
        """MalformedDocument always carries a bounded message"""
        self.assertLessEqual( len( str( MalformedDocument( "☃" * 1000 ) ).encode( 'utf-8' ) ), 256 )

    def testTaxonomy ( self ) :
        """The errors fit the usual Python exception types"""
        self.assertTrue( issubclass( InvalidInputType, TypeError ) )
        self.assertTrue( issubclass( MalformedDocument, ValueError ) )
        self.assertTrue( issubclass( NotAnXrdDocument, MalformedDocument ) )
        for cls in ( InvalidInputType, MalformedDocument, NotAnXrdDocument ) :
            self.assertTrue( issubclass( cls, xrdoc.XrdError ) )

if __name__ == "__main__":
    unittest.main()
