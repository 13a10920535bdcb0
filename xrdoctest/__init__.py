from datetime import datetime, timezone

from xrdoc import XrdDocument

SUBJECT = "http://example.tld/articles/11"
EXPIRES = datetime( 2020, 1, 15, 0, 0, 1, tzinfo = timezone.utc )

def example_document () :
    r"""The document used throughout the examples: one of every field."""
    doc = XrdDocument()
    doc.set_expires( EXPIRES )
    doc.set_subject( SUBJECT )
    doc.append_alias( "http://example.tld/cool_article" )
    doc.set_property( "http://x.example.tld/ns/version", "1.3" )
    doc.append_link( { 'rel' : "author", 'type' : "text/html", 'href' : "http://example.tld/authors/2" } )
    return doc

def example_data () :
    return {
        'expires' : EXPIRES,
        'subject' : SUBJECT,
        'aliases' : [ "http://example.tld/cool_article" ],
        'properties' : { "http://x.example.tld/ns/version" : "1.3" },
        'links' : [ { 'rel' : "author", 'type' : "text/html", 'href' : "http://example.tld/authors/2" } ],
    }

class XrdTests ( object ) :
    r"""Cases that hold for both encodings.  Subclasses are TestCases whose setUp provides
    ``self.dumps`` and ``self.loads``."""

    def _perform ( self, doc, expected ) :
        result = self.loads( self.dumps( doc ) )
        self.assertEqual( expected, result )
        return result

    def testExample ( self ) :
        """The example document survives a round trip"""
        self._perform( example_document(), example_data() )

    def testEmptyDocument ( self ) :
        """A document with nothing set decodes to an empty dict"""
        self._perform( XrdDocument(), {} )

    def testSubjectOnly ( self ) :
        """Unset fields stay absent rather than becoming empty values"""
        self._perform( XrdDocument( subject = "x" ), { 'subject' : "x" } )

    def testExpires ( self ) :
        """Expiration is written in UTC and read back as an aware datetime"""
        result = self._perform( XrdDocument( expires = EXPIRES ), { 'expires' : EXPIRES } )
        self.assertEqual( timezone.utc, result['expires'].tzinfo )

    def testExpiresConvertedToUTC ( self ) :
        """An aware datetime in another zone is converted before it is written"""
        from datetime import timedelta
        local = datetime( 2020, 1, 15, 2, 0, 1, tzinfo = timezone( timedelta( hours = 2 ) ) )
        self._perform( XrdDocument( expires = local ), { 'expires' : EXPIRES } )

    def testNaiveExpiresTakenAsUTC ( self ) :
        """A naive datetime is written as if it were UTC"""
        self._perform( XrdDocument( expires = datetime( 2020, 1, 15, 0, 0, 1 ) ), { 'expires' : EXPIRES } )

    def testExpiresMustBeDatetime ( self ) :
        """A non-datetime expiration is left out of the output"""
        self._perform( XrdDocument( expires = "2020-01-15T00:00:01Z" ), {} )

    def testAliasOrder ( self ) :
        """Aliases keep their order and their duplicates"""
        doc = XrdDocument()
        for alias in ( "b", "a", "b" ) :
            doc.append_alias( alias )
        self._perform( doc, { 'aliases' : [ "b", "a", "b" ] } )

    def testPropertyWithoutValue ( self ) :
        """A property without a value stays a property without a value"""
        doc = XrdDocument().set_property( "http://x.example.tld/ns/flag" )
        self._perform( doc, { 'properties' : { "http://x.example.tld/ns/flag" : None } } )

    def testPropertyOrder ( self ) :
        """Properties keep insertion order and the last write for a key wins"""
        doc = XrdDocument()
        doc.set_property( "t:1", "one" ).set_property( "t:2", "two" ).set_property( "t:1", "uno" )
        result = self._perform( doc, { 'properties' : { "t:1" : "uno", "t:2" : "two" } } )
        self.assertEqual( [ "t:1", "t:2" ], list( result['properties'] ) )

    def testLinkOrder ( self ) :
        """Links keep their order"""
        doc = XrdDocument()
        doc.append_link( { 'rel' : "author", 'href' : "http://example.tld/authors/2" } )
        doc.append_link( { 'rel' : "copyright", 'template' : "http://example.tld/copyright?id={uri}" } )
        self._perform( doc, { 'links' : [
            { 'rel' : "author", 'href' : "http://example.tld/authors/2" },
            { 'rel' : "copyright", 'template' : "http://example.tld/copyright?id={uri}" } ] } )

    def testLinkWhitelist ( self ) :
        """Unknown link keys never reach the output, even when put in the document directly"""
        doc = XrdDocument( links = [ { 'rel' : "me", 'title' : "Me", 'x-custom' : "1" } ] )
        result = self._perform( doc, { 'links' : [ { 'rel' : "me" } ] } )
        self.assertNotIn( 'title', result['links'][0] )

    def testEmptyLink ( self ) :
        """An empty link is still written, as a link without attributes"""
        self._perform( XrdDocument().append_link( {} ), { 'links' : [ {} ] } )

    def testNonStringInput ( self ) :
        """Decoders only accept text"""
        from xrdoc import InvalidInputType
        for value in ( None, 42, b"{}", [ "x" ] ) :
            self.assertRaises( InvalidInputType, self.loads, value )
