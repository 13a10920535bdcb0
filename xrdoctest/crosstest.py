#!/usr/bin/env python
#    xrdoctest/crosstest.py - test cases comparing the XML and JSON encodings
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

from xrdoc import XrdDocument, XML, JSON
import xrdoctest

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

def documents () :
    yield XrdDocument()
    yield xrdoctest.example_document()
    yield XrdDocument( subject = "acct:alice@example.tld" )
    yield XrdDocument( expires = xrdoctest.EXPIRES )
    doc = XrdDocument( subject = "http://example.tld/" )
    doc.append_alias( "http://a.example.tld/" ).append_alias( "http://b.example.tld/" ).append_alias( "http://a.example.tld/" )
    doc.set_property( "http://x.example.tld/ns/flag" ).set_property( "http://x.example.tld/ns/name", "näme" )
    doc.append_link( { 'rel' : "lrdd", 'template' : "http://example.tld/lrdd?uri={uri}" } )
    doc.append_link( { 'rel' : "self", 'type' : "application/json", 'href' : "http://example.tld/self", 'template' : "" } )
    doc.append_link( {} )
    yield doc

class CrossFormatTests ( unittest.TestCase ) :
    def testEquivalence ( self ) :
        """Both encodings decode to the same data"""
        for doc in documents() :
            self.assertEqual( XML.loads( XML.dumps( doc ) ), JSON.loads( JSON.dumps( doc ) ) )

    def testXmlIdempotence ( self ) :
        """Decoding, rebuilding and re-encoding XML gives back the same data"""
        for doc in documents() :
            first = XML.loads( XML.dumps( doc ) )
            self.assertEqual( first, XML.loads( XML.dumps( XrdDocument.from_data( first ) ) ) )

    def testJsonIdempotence ( self ) :
        """Decoding, rebuilding and re-encoding JSON gives back the same data"""
        for doc in documents() :
            first = JSON.loads( JSON.dumps( doc ) )
            self.assertEqual( first, JSON.loads( JSON.dumps( XrdDocument.from_data( first ) ) ) )

    def testConversion ( self ) :
        """An XRD converts to the equivalent JRD and back"""
        data = XML.loads( XML.dumps( xrdoctest.example_document() ) )
        jrd = JSON.dumps( XrdDocument.from_data( data ) )
        self.assertEqual( data, JSON.loads( jrd ) )
        self.assertEqual( XML.dumps( xrdoctest.example_document() ), XML.dumps( XrdDocument.from_data( JSON.loads( jrd ) ) ) )

    def testAliasAsymmetry ( self ) :
        """Invalid aliases are dropped by XML but carried by JSON"""
        doc = XrdDocument( aliases = [ "a", "", None ] )
        self.assertEqual( { 'aliases' : [ "a" ] }, XML.loads( XML.dumps( doc ) ) )
        self.assertEqual( { 'aliases' : [ "a", "", None ] }, JSON.loads( JSON.dumps( doc ) ) )

    def testEmptySubjectAsymmetry ( self ) :
        """An empty subject is dropped by XML but carried by JSON"""
        doc = XrdDocument( subject = "" )
        self.assertEqual( {}, XML.loads( XML.dumps( doc ) ) )
        self.assertEqual( { 'subject' : "" }, JSON.loads( JSON.dumps( doc ) ) )

if __name__ == "__main__":
    unittest.main()
