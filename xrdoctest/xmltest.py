#!/usr/bin/env python
#    xrdoctest/xmltest.py - test cases for xrdoc over XML
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
import xml.etree.ElementTree as ET

from xrdoc import XMLNS, XrdDocument, InvalidInputType, MalformedDocument, NotAnXrdDocument
from xrdoc.XML import NS, dumps, loads, dump, load, marshal, unmarshal
import xrdoctest

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

EXAMPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<XRD xmlns="http://docs.oasis-open.org/ns/xri/xrd-1.0">
  <Expires>2020-01-15T00:00:01Z</Expires>
  <Subject>http://example.tld/articles/11</Subject>
  <Alias>http://example.tld/cool_article</Alias>
  <Property type="http://x.example.tld/ns/version">1.3</Property>
  <Link rel="author" type="text/html" href="http://example.tld/authors/2" />
</XRD>
"""

def xrd ( body ) :
    return '<XRD xmlns="%s">%s</XRD>' % ( XMLNS, body )

class XrdXMLTests ( xrdoctest.XrdTests, unittest.TestCase ) :
    def setUp ( self ) :
        self.dumps = dumps
        self.loads = loads

class XMLEncoderTests ( unittest.TestCase ) :
    def testExampleOutput ( self ) :
        """The example document is written as published, apart from the "<Link ... />" spacing ElementTree uses"""
        self.assertEqual( EXAMPLE_XML, dumps( xrdoctest.example_document() ) )

    def testCompactOutput ( self ) :
        """Without pretty printing or declaration the output is a single element"""
        text = dumps( XrdDocument( subject = "x" ), pretty_print = False, xml_declaration = False )
        self.assertEqual( '<XRD xmlns="%s"><Subject>x</Subject></XRD>' % XMLNS, text )

    def testEmptyDocument ( self ) :
        """A document with nothing set is just the root element"""
        self.assertEqual( '<XRD xmlns="%s" />' % XMLNS, dumps( XrdDocument(), pretty_print = False, xml_declaration = False ) )

    def testInvalidAliasesSkipped ( self ) :
        """Aliases that are not non-empty strings produce no Alias element"""
        doc = XrdDocument()
        for alias in ( "a", "", None, 42, [ "b" ], "c" ) :
            doc.append_alias( alias )
        root = marshal( doc ).getroot()
        self.assertEqual( [ "a", "c" ], [ e.text for e in root.findall( 'xrd:Alias', NS ) ] )
        self.assertEqual( { 'aliases' : [ "a", "c" ] }, loads( dumps( doc ) ) )

    def testEmptySubjectSkipped ( self ) :
        """An empty subject produces no Subject element"""
        self.assertEqual( {}, loads( dumps( XrdDocument( subject = "" ) ) ) )

    def testLinkAttributeOrder ( self ) :
        """Link attributes are written as rel, type, href, template whatever order they were given in"""
        doc = XrdDocument().append_link( { 'template' : "t", 'href' : "h", 'type' : "y", 'rel' : "r" } )
        text = dumps( doc, pretty_print = False, xml_declaration = False )
        self.assertIn( '<Link rel="r" type="y" href="h" template="t" />', text )

    def testLinkValues ( self ) :
        """Link attributes without a value are skipped, others are written as text"""
        doc = XrdDocument( links = [ { 'rel' : None, 'href' : 5 } ] )
        self.assertEqual( { 'links' : [ { 'href' : "5" } ] }, loads( dumps( doc ) ) )

    def testEmptyPropertyValue ( self ) :
        """An empty property value cannot be told apart from no value in XML"""
        doc = XrdDocument().set_property( "t", "" )
        self.assertEqual( { 'properties' : { "t" : None } }, loads( dumps( doc ) ) )

    def testPropertyWithoutType ( self ) :
        """A property keyed by None is written without a type attribute"""
        doc = XrdDocument().set_property( None, "v" )
        root = marshal( doc ).getroot()
        self.assertEqual( {}, root.find( 'xrd:Property', NS ).attrib )
        self.assertEqual( { 'properties' : { None : "v" } }, loads( dumps( doc ) ) )

    def testEscaping ( self ) :
        """Markup characters in values are escaped"""
        doc = XrdDocument( subject = "a<b&c" ).append_link( { 'href' : 'say "hi"' } )
        self.assertEqual( { 'subject' : "a<b&c", 'links' : [ { 'href' : 'say "hi"' } ] }, loads( dumps( doc ) ) )

    def testDump ( self ) :
        """dump writes UTF-8 bytes that load reads back"""
        f = io.BytesIO()
        dump( xrdoctest.example_document(), f )
        self.assertTrue( f.getvalue().startswith( b"<?xml" ) )
        f.seek( 0 )
        self.assertEqual( xrdoctest.example_data(), load( f ) )

    def testToXml ( self ) :
        """XrdDocument.to_xml is dumps"""
        doc = xrdoctest.example_document()
        self.assertEqual( dumps( doc, pretty_print = False ), doc.to_xml( pretty_print = False ) )

    def testMarshalUnmarshal ( self ) :
        """A marshalled tree unmarshals to the same data as its text"""
        doc = xrdoctest.example_document()
        tree = marshal( doc )
        self.assertEqual( "{%s}XRD" % XMLNS, tree.getroot().tag )
        self.assertEqual( xrdoctest.example_data(), unmarshal( tree ) )
        self.assertEqual( loads( dumps( doc ) ), unmarshal( tree ) )

class XMLDecoderTests ( unittest.TestCase ) :
    def testExampleInput ( self ) :
        """The published example decodes to the example data"""
        self.assertEqual( xrdoctest.example_data(), loads( EXAMPLE_XML ) )

    def testPropertyContent ( self ) :
        """A self-closed property has no value, a property with text has that text"""
        data = loads( xrd( '<Property type="t"/><Property type="u">v</Property><Property type="w"></Property>' ) )
        self.assertEqual( { "t" : None, "u" : "v", "w" : None }, data['properties'] )

    def testPropertyWhitespace ( self ) :
        """Whitespace content is content"""
        data = loads( xrd( '<Property type="t"> </Property>' ) )
        self.assertEqual( { "t" : " " }, data['properties'] )

    def testDuplicatePropertyType ( self ) :
        """The last property of a type wins"""
        data = loads( xrd( '<Property type="t">1</Property><Property type="t">2</Property>' ) )
        self.assertEqual( { "t" : "2" }, data['properties'] )

    def testAliasesNotValidated ( self ) :
        """Aliases are taken as found, including empty ones"""
        data = loads( xrd( '<Alias>a</Alias><Alias/><Alias>a</Alias>' ) )
        self.assertEqual( [ "a", "", "a" ], data['aliases'] )

    def testLinkAttributes ( self ) :
        """Only the recognized link attributes that are present are read"""
        data = loads( xrd( '<Link rel="self" title="Self" href="http://x"/><Link/>' ) )
        self.assertEqual( [ { 'rel' : "self", 'href' : "http://x" }, {} ], data['links'] )

    def testChildContent ( self ) :
        """Element content includes the text of nested elements"""
        data = loads( xrd( '<Subject>a<b>b</b>c</Subject>' ) )
        self.assertEqual( "abc", data['subject'] )

    def testFirstExpiresAndSubject ( self ) :
        """Only the first Expires and Subject elements are read"""
        data = loads( xrd( '<Subject>a</Subject><Subject>b</Subject>' ) )
        self.assertEqual( { 'subject' : "a" }, data )

    def testForeignElementsIgnored ( self ) :
        """Elements outside the XRD namespace and unknown elements are ignored"""
        data = loads( xrd( '<Title>t</Title><Subject xmlns="urn:other">x</Subject><x:Alias xmlns:x="urn:other">y</x:Alias>' ) )
        self.assertEqual( {}, data )

    def testPrefixedNamespace ( self ) :
        """The namespace may be bound to any prefix"""
        data = loads( '<x:XRD xmlns:x="%s"><x:Subject>s</x:Subject></x:XRD>' % XMLNS )
        self.assertEqual( { 'subject' : "s" }, data )

    def testRootWithoutNamespace ( self ) :
        """The root is checked by name only; its un-namespaced children are not read"""
        self.assertEqual( {}, loads( '<XRD><Subject>s</Subject></XRD>' ) )

    def testWrongRoot ( self ) :
        """A well-formed document with another root is rejected"""
        self.assertRaises( NotAnXrdDocument, loads, '<Foo/>' )
        self.assertRaises( NotAnXrdDocument, loads, '<JRD xmlns="%s"/>' % XMLNS )

    def testMissingRoot ( self ) :
        """An ElementTree without a root is rejected"""
        self.assertRaises( NotAnXrdDocument, unmarshal, ET.ElementTree() )

    def testNotXml ( self ) :
        """Text that is not XML is rejected"""
        for text in ( "not xml", "", "<XRD>", "<XRD></xrd>", xrd( '<Subject>\ud800</Subject>' ) ) :
            with self.assertRaises( MalformedDocument ) as ctx :
                loads( text )
            self.assertNotIsInstance( ctx.exception, NotAnXrdDocument )
            self.assertLessEqual( len( str( ctx.exception ).encode( 'utf-8' ) ), 256 )

    def testBadExpires ( self ) :
        """An expiration in any other format fails the whole document"""
        for value in ( "2020-01-15", "2020-01-15T00:00:01+00:00", "tomorrow", "" ) :
            self.assertRaises( MalformedDocument, loads, xrd( '<Subject>s</Subject><Expires>%s</Expires>' % value ) )

    def testEntitiesRefused ( self ) :
        """Entity declarations are refused rather than expanded"""
        text = '<!DOCTYPE XRD [<!ENTITY a "aaaaaaaaaa"><!ENTITY b "&a;&a;&a;&a;">]>' + xrd( '<Subject>&b;</Subject>' )
        self.assertRaises( MalformedDocument, loads, text )

    def testNonStringInput ( self ) :
        """Bytes are not accepted by loads"""
        self.assertRaises( InvalidInputType, loads, EXAMPLE_XML.encode( 'utf-8' ) )

    def testUnmarshalElement ( self ) :
        """unmarshal accepts a parsed root element as well as a tree"""
        root = ET.fromstring( xrd( '<Subject>s</Subject>' ) )
        self.assertEqual( { 'subject' : "s" }, unmarshal( root ) )
        self.assertEqual( { 'subject' : "s" }, unmarshal( ET.ElementTree( root ) ) )

if __name__ == "__main__":
    unittest.main()
