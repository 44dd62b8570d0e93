"""
Educational content catalog.

Static, read-only list of learning topics and of the calculators exposed
under /calculators.
"""
from typing import List, Optional

from finovo.app.schemas.content import CalculatorInfo, Topic

TOPICS: tuple[Topic, ...] = (
    Topic(
        slug="personal-finance",
        title="Personal Finance",
        description="Budgeting, saving, debt management, and emergency funds",
        items=["Monthly Budgeting", "Emergency Fund", "Debt Management", "Tax Planning"],
        ),
    Topic(
        slug="investment-basics",
        title="Investment Basics",
        description="Understanding different investment vehicles and strategies",
        items=["SIP & Mutual Funds", "Risk Assessment", "Portfolio Building", "Investment Goals"],
        ),
    Topic(
        slug="stock-market",
        title="Stock Market",
        description="NSE, BSE, trading basics, and market analysis",
        items=["Market Basics", "Trading vs Investing", "Technical Analysis", "Fundamental Analysis"],
        ),
    Topic(
        slug="shares-bonds",
        title="Shares & Bonds",
        description="Equity investments, government securities, and corporate bonds",
        items=["Share Valuation", "Government Bonds", "Corporate Bonds", "Dividend Investing"],
        ),
    Topic(
        slug="financial-planning",
        title="Financial Planning",
        description="Long-term wealth creation and retirement planning",
        items=["Retirement Planning", "Insurance Needs", "Goal Setting", "Wealth Creation"],
        ),
    Topic(
        slug="advanced-strategies",
        title="Advanced Strategies",
        description="Options, derivatives, and advanced investment techniques",
        items=["Options Trading", "Derivatives", "Hedge Strategies", "Alternative Investments"],
        ),
    )

CALCULATORS: tuple[CalculatorInfo, ...] = (
    CalculatorInfo(
        slug="sip",
        name="SIP Calculator",
        description="Future value of a fixed monthly investment",
        endpoint="/calculators/sip",
        ),
    CalculatorInfo(
        slug="emi",
        name="EMI Calculator",
        description="Monthly installment, total payable and interest of a loan",
        endpoint="/calculators/emi",
        ),
    CalculatorInfo(
        slug="retirement",
        name="Retirement Planner",
        description="Corpus and monthly SIP needed to retire",
        endpoint="/calculators/retirement",
        ),
    CalculatorInfo(
        slug="goal",
        name="Goal-based SIP",
        description="Monthly SIP needed to reach a target amount",
        endpoint="/calculators/goal",
        ),
    )


def list_topics() -> List[Topic]:
    return list(TOPICS)


def get_topic(slug: str) -> Optional[Topic]:
    return next((topic for topic in TOPICS if topic.slug == slug), None)


def list_calculators() -> List[CalculatorInfo]:
    return list(CALCULATORS)
