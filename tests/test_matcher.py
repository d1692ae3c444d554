from gmoney.matcher import ServiceMatcher
from gmoney.models import ServiceDefinition


def test_domain_match_is_case_insensitive(catalog, make_message):
    matcher = ServiceMatcher(catalog)
    message = make_message(sender="Uber Receipts <NoReply@UBER.com>", subject="Receipt", body="")
    assert matcher.match(message).id == "uber"


def test_domain_pass_runs_before_keyword_pass(catalog, make_message):
    # "trip" is an uber keyword, but the sender domain belongs to netflix
    matcher = ServiceMatcher(catalog)
    message = make_message(sender="info@account.netflix.com", subject="Your trip", body="Plan renewed")
    assert matcher.match(message).id == "netflix"


def test_keyword_match_in_body_or_subject(catalog, make_message):
    matcher = ServiceMatcher(catalog)
    by_subject = make_message(sender="friend@gmail.com", subject="Fwd: Your TRIP receipt", body="see below")
    by_body = make_message(sender="friend@gmail.com", subject="Fwd", body="Amazon Order Confirmation #123")
    assert matcher.match(by_subject).id == "uber"
    assert matcher.match(by_body).id == "amazon"


def test_catalog_order_breaks_ties(make_message):
    first = ServiceDefinition(id="first", name="First", email_domains=["shop.com"])
    second = ServiceDefinition(id="second", name="Second", email_domains=["shop.com"])
    message = make_message(sender="orders@shop.com")
    assert ServiceMatcher([first, second]).match(message).id == "first"
    assert ServiceMatcher([second, first]).match(message).id == "second"


def test_empty_criteria_never_match(make_message):
    service = ServiceDefinition(id="blank", name="Blank", email_domains=[""], keywords=[""])
    assert ServiceMatcher([service]).match(make_message()) is None


def test_no_match(catalog, make_message):
    message = make_message(sender="news@example.org", subject="Weekly digest", body="Hello")
    assert ServiceMatcher(catalog).match(message) is None


def test_missing_subject_is_not_text(make_message):
    service = ServiceDefinition(id="none", name="None", keywords=["none"])
    message = make_message(sender="friend@gmail.com", subject=None, body=None)
    assert ServiceMatcher([service]).match(message) is None
